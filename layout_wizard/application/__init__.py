"""
Прикладной слой домена Layout: фабрика импортёров, пресеты, сервис.
"""

from .factory import ImporterFactory
from .layout_service import LayoutService, assign_split_sides
from .preset_registry import PresetDefinition, PresetRegistry

__all__ = [
    "ImporterFactory",
    "LayoutService",
    "assign_split_sides",
    "PresetDefinition",
    "PresetRegistry",
]
