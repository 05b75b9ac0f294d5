"""
Адаптеры форматов раскладок.

Каждый реализует ILayoutImporter (и/или ILayoutExporter) над ядром вывода.
"""

from .base import BaseLayoutImporter
from .dts_layout_adapter import DtsLayoutImporter
from .json_layout_adapter import JsonLayoutImporter
from .kle_layout_adapter import KleLayoutExporter, KleLayoutImporter, parse_position_label

__all__ = [
    "BaseLayoutImporter",
    "DtsLayoutImporter",
    "JsonLayoutImporter",
    "KleLayoutImporter",
    "KleLayoutExporter",
    "parse_position_label",
]
