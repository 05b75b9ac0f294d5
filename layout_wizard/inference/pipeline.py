"""
Layout Inference Pipeline - Оркестратор 3 этапов physical -> logical.

Координирует выполнение этапов в строгом порядке:
1. Rows → 2. Columns → 3. Finalize

Меняет row/col клавиш НА МЕСТЕ и сортирует список по (row, col).

Контракт:
- Пустой список - no-op
- Результат не зависит от порядка входного списка (стратегия GAPS)
- Повторный запуск не меняет row/col (идемпотентность)
- Ни одна клетка (row, col) не занята дважды

Предусловие (не перепроверяется): w, h > 0, все координаты конечны.
Модель Key гарантирует это при создании.

Ядро без глобального состояния: параллельные вызовы на РАЗНЫХ списках
безопасны, один и тот же список вызывающий сериализует сам.
"""

import time
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from config.settings import ROW_TOLERANCE
from contracts.key_dto import Key

from .s1_rows.stage import RowClusteringStage, RowResult, RowStrategy
from .s2_columns.stage import ColumnAssignmentStage, ColumnResult
from .s3_finalize.stage import FinalizeStage, FinalizeResult


@dataclass
class InferenceResult:
    """
    Полный результат пайплайна со всеми промежуточными данными.

    Используется для отладки и анализа.
    """
    rows: Optional[RowResult] = None
    columns: Optional[ColumnResult] = None
    finalize: Optional[FinalizeResult] = None

    # Метрики
    processing_time_ms: float = 0.0
    stages_completed: int = 0

    @property
    def row_count(self) -> int:
        return self.finalize.row_count if self.finalize else 0

    @property
    def column_count(self) -> int:
        return self.finalize.column_count if self.finalize else 0

    def to_dict(self) -> dict:
        return {
            "rows": self.rows.to_dict() if self.rows else None,
            "columns": self.columns.to_dict() if self.columns else None,
            "finalize": self.finalize.to_dict() if self.finalize else None,
            "processing_time_ms": self.processing_time_ms,
            "stages_completed": self.stages_completed,
        }


class LayoutInferencePipeline:
    """
    Пайплайн вывода логической раскладки.

    ЦКП: Каждая клавиша имеет уникальные (row, col), список отсортирован.
    """

    def __init__(
        self,
        row_stage: Optional[RowClusteringStage] = None,
        column_stage: Optional[ColumnAssignmentStage] = None,
        finalize_stage: Optional[FinalizeStage] = None,
    ):
        """
        Инициализация пайплайна.

        Args:
            Все этапы опциональны, по умолчанию создаются стандартные.
        """
        self.row_stage = row_stage or RowClusteringStage()
        self.column_stage = column_stage or ColumnAssignmentStage()
        self.finalize_stage = finalize_stage or FinalizeStage()

    def process(self, keys: List[Key]) -> InferenceResult:
        """
        Назначает row/col всем клавишам.

        Args:
            keys: Список клавиш (меняется на месте)

        Returns:
            InferenceResult: Промежуточные результаты этапов
        """
        if not keys:
            logger.debug("[LayoutInferencePipeline] Пустая раскладка, пропускаем")
            return InferenceResult()

        start_time = time.time()

        rows = self.row_stage.process(keys)
        columns = self.column_stage.process(rows)
        finalize = self.finalize_stage.process(keys, columns)

        processing_time_ms = (time.time() - start_time) * 1000

        logger.info(
            f"[LayoutInferencePipeline] {len(keys)} клавиш -> "
            f"{finalize.row_count} рядов x {finalize.column_count} колонок "
            f"за {processing_time_ms:.1f}ms"
        )

        return InferenceResult(
            rows=rows,
            columns=columns,
            finalize=finalize,
            processing_time_ms=processing_time_ms,
            stages_completed=3,
        )


def infer_logical_layout(
    keys: List[Key],
    tolerance: float = ROW_TOLERANCE,
    strategy: RowStrategy = RowStrategy.GAPS,
) -> None:
    """
    Точка входа ядра: назначает row/col на месте и сортирует список.

    Args:
        keys: Клавиши раскладки
        tolerance: Порог разрыва рядов (юниты)
        strategy: GAPS (по умолчанию, не зависит от порядка) или ORDERED
    """
    pipeline = LayoutInferencePipeline(
        row_stage=RowClusteringStage(tolerance=tolerance, strategy=strategy),
    )
    pipeline.process(keys)
