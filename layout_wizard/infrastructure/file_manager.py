"""
Менеджер файлов для домена Layout.

Чтение исходников раскладок и сохранение результатов (JSON / KLE).
"""

import json
from pathlib import Path
from typing import Any, Dict

from loguru import logger

from ..domain.exceptions import LayoutFileNotFoundError, LayoutFileWriteError


class LayoutFileManager:
    """Менеджер файлов для домена Layout."""

    def read_text(self, file_path: Path) -> str:
        """
        Читает текстовый файл раскладки (DTS, JSON, KLE).

        Raises:
            LayoutFileNotFoundError: Если файл не существует
            LayoutFileWriteError: Если файл не удалось прочитать
        """
        if not file_path.exists():
            raise LayoutFileNotFoundError(
                message=f"Файл не найден: {file_path}",
                component="LayoutFileManager"
            )

        try:
            text = file_path.read_text(encoding="utf-8")
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise LayoutFileWriteError(
                message=f"Не удалось прочитать файл: {file_path}",
                component="LayoutFileManager",
                original_error=e
            )

        logger.debug(f"[Layout] Файл прочитан: {file_path}")
        return text

    def save_text(self, text: str, file_path: Path) -> Path:
        """Сохраняет текст (например, KLE JSON) в файл, создавая директорию."""
        self.ensure_directory(file_path.parent)
        try:
            file_path.write_text(text, encoding="utf-8")
        except (IOError, OSError) as e:
            raise LayoutFileWriteError(
                message=f"Не удалось сохранить файл: {file_path}",
                component="LayoutFileManager",
                original_error=e
            )

        logger.debug(f"[Layout] Файл сохранен: {file_path}")
        return file_path

    def save_json(self, data: Dict[str, Any], file_path: Path) -> Path:
        """
        Сохраняет данные в JSON файл.

        Args:
            data: Данные для сохранения
            file_path: Путь для сохранения

        Returns:
            Путь к сохраненному файлу

        Raises:
            LayoutFileWriteError: Если не удалось сохранить файл
        """
        self.ensure_directory(file_path.parent)
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)

        except (IOError, OSError, TypeError) as e:
            raise LayoutFileWriteError(
                message=f"Не удалось сохранить JSON файл: {file_path}",
                component="LayoutFileManager",
                original_error=e
            )

        logger.debug(f"[Layout] Файл сохранен: {file_path}")
        return file_path

    def ensure_directory(self, directory_path: Path) -> Path:
        """Создает директорию если она не существует."""
        try:
            directory_path.mkdir(parents=True, exist_ok=True)
        except (IOError, OSError) as e:
            raise LayoutFileWriteError(
                message=f"Не удалось создать директорию: {directory_path}",
                component="LayoutFileManager",
                original_error=e
            )

        logger.debug(f"[Layout] Директория создана/проверена: {directory_path}")
        return directory_path
