"""
Вывод логической раскладки (physical -> logical).

Архитектура: 3-этапный пайплайн
- Stage 1: Rows (кластеризация рядов по разрывам Y)
- Stage 2: Columns (sweep-line назначение колонок)
- Stage 3: Finalize (компакция, row/col, сортировка)

Вход: List[Key] с неизвестными row/col
Выход: тот же список, row/col назначены, отсортирован по (row, col)
"""

from .pipeline import LayoutInferencePipeline, InferenceResult, infer_logical_layout
from .s1_rows import RowClusteringStage, RowResult, RowStrategy, PlacedKey, cluster_into_rows
from .s2_columns import ColumnAssignmentStage, ColumnResult, assign_columns
from .s3_finalize import FinalizeStage, FinalizeResult, finalize_grid

__all__ = [
    # Pipeline
    "LayoutInferencePipeline",
    "InferenceResult",
    "infer_logical_layout",
    # Stages
    "RowClusteringStage",
    "RowResult",
    "RowStrategy",
    "PlacedKey",
    "cluster_into_rows",
    "ColumnAssignmentStage",
    "ColumnResult",
    "assign_columns",
    "FinalizeStage",
    "FinalizeResult",
    "finalize_grid",
]
