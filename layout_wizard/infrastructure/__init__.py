"""
Инфраструктурный слой домена Layout.

Содержит адаптеры форматов, KLE-кодек и менеджер файлов.
"""

from .file_manager import LayoutFileManager

__all__ = [
    "LayoutFileManager",
]
