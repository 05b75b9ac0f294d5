"""
Stage 3: Compaction & Finalization

ЦКП: Целые row/col на каждой клавише и канонический порядок списка.

Input: ColumnResult (Stage 2) + исходный список клавиш
Output: FinalizeResult; клавиши изменены НА МЕСТЕ

1. Удаляем колонки без клавиш (sweep из Stage 2 их не создаёт,
   но проход обязателен для любых вариантов сетки)
2. key.row = индекс ряда, key.col = индекс колонки после компакции
3. Список вызывающего пересортировывается по (row, col)
"""

from dataclasses import dataclass
from typing import List

from loguru import logger

from contracts.key_dto import Key

from ..s2_columns.stage import Column, ColumnResult


def compact_columns(columns: List[Column]) -> List[Column]:
    """Возвращает только колонки, в которых есть хотя бы одна клавиша."""
    return [column for column in columns if any(slot is not None for slot in column)]


def finalize_grid(columns: List[Column]) -> int:
    """
    Записывает row/col в клавиши сетки.

    Args:
        columns: Сетка columns[c][r]

    Returns:
        Количество клавиш, получивших позицию
    """
    assigned = 0
    for col_index, column in enumerate(compact_columns(columns)):
        for row_index, placed in enumerate(column):
            if placed is None:
                continue
            placed.key.row = row_index
            placed.key.col = col_index
            assigned += 1
    return assigned


def sort_keys(keys: List[Key]) -> None:
    """Сортирует список клавиш на месте по (row, col)."""
    keys.sort(key=lambda key: (key.row, key.col))


@dataclass
class FinalizeResult:
    """
    Результат Stage 3: Finalization.

    ЦКП: Итоговые размеры логической сетки.
    """
    row_count: int = 0
    column_count: int = 0
    removed_columns: int = 0
    assigned_keys: int = 0

    def to_dict(self) -> dict:
        return {
            "row_count": self.row_count,
            "column_count": self.column_count,
            "removed_columns": self.removed_columns,
            "assigned_keys": self.assigned_keys,
        }


class FinalizeStage:
    """
    Stage 3: Compaction & Finalization.
    """

    def process(self, keys: List[Key], column_result: ColumnResult) -> FinalizeResult:
        """
        Назначает row/col и сортирует клавиши.

        Args:
            keys: Список клавиш вызывающего (меняется на месте)
            column_result: Результат Stage 2

        Returns:
            FinalizeResult
        """
        compacted = compact_columns(column_result.columns)
        removed = column_result.column_count - len(compacted)
        if removed:
            logger.warning(f"[Stage 3: Finalize] Удалено пустых колонок: {removed}")

        assigned = finalize_grid(compacted)
        sort_keys(keys)

        result = FinalizeResult(
            row_count=column_result.row_count,
            column_count=len(compacted),
            removed_columns=removed,
            assigned_keys=assigned,
        )

        logger.debug(
            f"[Stage 3: Finalize] Сетка {result.row_count}x{result.column_count}, "
            f"назначено {assigned} клавиш"
        )

        return result
