"""
Базовый адаптер импорта: общая сборка Key и вызов ядра вывода.
"""

from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from contracts.key_dto import Key

from ...domain.exceptions import LayoutParseError
from ...domain.interfaces import ILayoutImporter
from ...inference.pipeline import LayoutInferencePipeline
from ...inference.s1_rows.stage import RowClusteringStage, RowStrategy


class BaseLayoutImporter(ILayoutImporter):
    """
    Общая часть всех импортёров.

    assume_ordered=True включает быстрый путь ORDERED (разрыв по X)
    для источников, где клавиши уже перечислены по рядам.
    """

    def __init__(
        self,
        pipeline: Optional[LayoutInferencePipeline] = None,
        assume_ordered: bool = False,
    ):
        self.assume_ordered = assume_ordered
        if pipeline is None:
            strategy = RowStrategy.ORDERED if assume_ordered else RowStrategy.GAPS
            pipeline = LayoutInferencePipeline(row_stage=RowClusteringStage(strategy=strategy))
        self.pipeline = pipeline

    def _make_key(self, **fields) -> Key:
        """Создаёт Key, превращая ошибку валидации в LayoutParseError."""
        try:
            return Key(**fields)
        except ValidationError as e:
            raise LayoutParseError(
                message="Некорректная геометрия клавиши",
                component=type(self).__name__,
                original_error=e,
            )

    def _infer(self, keys: List[Key]) -> None:
        logger.debug(f"[{type(self).__name__}] Вывод row/col для {len(keys)} клавиш")
        self.pipeline.process(keys)

    def _fail(self, message: str, original_error: Exception = None) -> LayoutParseError:
        return LayoutParseError(
            message=message,
            component=type(self).__name__,
            original_error=original_error,
        )
