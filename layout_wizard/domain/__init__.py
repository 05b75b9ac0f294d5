"""
Домен Layout: исключения и интерфейсы.
"""

from .exceptions import (
    LayoutError,
    EmptyLayoutError,
    LayoutParseError,
    LayoutValidationError,
    LayoutConfigurationError,
    PresetNotFoundError,
    LayoutFileSystemError,
    LayoutFileNotFoundError,
    LayoutFileWriteError,
)
from .interfaces import ILayoutImporter, ILayoutExporter

__all__ = [
    "LayoutError",
    "EmptyLayoutError",
    "LayoutParseError",
    "LayoutValidationError",
    "LayoutConfigurationError",
    "PresetNotFoundError",
    "LayoutFileSystemError",
    "LayoutFileNotFoundError",
    "LayoutFileWriteError",
    "ILayoutImporter",
    "ILayoutExporter",
]
