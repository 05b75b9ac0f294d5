"""
Интерфейсы (абстрактные классы) для домена Layout.

Адаптеры форматов реализуют ILayoutImporter / ILayoutExporter,
фабрика выбирает нужный по имени формата или по содержимому.
"""

from abc import ABC, abstractmethod
from typing import List

from contracts.key_dto import Key


class ILayoutImporter(ABC):
    """Интерфейс импорта раскладки из внешнего текстового формата."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Имя формата (для логирования и фабрики)."""
        pass

    @abstractmethod
    def parse(self, text: str) -> List[Key]:
        """
        Разбирает текст в список клавиш с назначенными row/col.

        Args:
            text: Содержимое файла раскладки

        Returns:
            Клавиши, отсортированные по (row, col)

        Raises:
            LayoutParseError: Если текст нельзя использовать как раскладку
        """
        pass


class ILayoutExporter(ABC):
    """Интерфейс экспорта раскладки во внешний текстовый формат."""

    @abstractmethod
    def serialize(self, keys: List[Key]) -> str:
        """
        Сериализует клавиши в текст.

        Args:
            keys: Клавиши раскладки

        Returns:
            Текст во внешнем формате
        """
        pass
