"""
Stage 2: Column Assignment

ЦКП: Разреженная сетка колонок: клавиши одной визуальной колонки
из разных рядов получают общий номер колонки.

Input: RowResult (Stage 1)
Output: ColumnResult (колонки слева направо, в каждой слот на каждый ряд)

Алгоритм (sweep-line слева направо):
1. По курсору на каждый ряд, начиная с самой левой клавиши
2. Среди всех курсоров берём клавишу с минимальным X
   (при равенстве - ряд с меньшим индексом)
3. Сдвигаем курсор этого ряда
4. Если в ПОСЛЕДНЕЙ открытой колонке слот этого ряда свободен - кладём туда,
   иначе открываем новую колонку
5. Пока не исчерпаны все ряды

Правило "только последняя колонка" сохраняет порядок колонок слева направо.
На сильно смещённых раскладках колонок может быть больше минимально
возможного - это принятый компромисс.

Сложность: O(n * rows).
"""

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from ..s1_rows.stage import PlacedKey, RowResult

Column = List[Optional[PlacedKey]]


def assign_columns(rows: List[List[PlacedKey]]) -> List[Column]:
    """
    Назначает колонки sweep-line проходом.

    Args:
        rows: Ряды сверху вниз, клавиши внутри ряда отсортированы по X

    Returns:
        Колонки; columns[c][r] - клавиша ряда r в колонке c или None
    """
    row_count = len(rows)
    columns: List[Column] = []
    cursors = [0] * row_count

    while True:
        best_row = -1
        best_x = 0.0
        for row_index in range(row_count):
            cursor = cursors[row_index]
            if cursor >= len(rows[row_index]):
                continue
            x = rows[row_index][cursor].x
            # Строгое "<": при равенстве X побеждает верхний ряд
            if best_row < 0 or x < best_x:
                best_row = row_index
                best_x = x

        if best_row < 0:
            break

        placed = rows[best_row][cursors[best_row]]
        cursors[best_row] += 1

        if not columns or columns[-1][best_row] is not None:
            columns.append([None] * row_count)
        columns[-1][best_row] = placed

    return columns


@dataclass
class ColumnResult:
    """
    Результат Stage 2: Column Assignment.

    ЦКП: Разреженная сетка columns[c][r].
    """
    columns: List[Column] = field(default_factory=list)
    row_count: int = 0

    @property
    def column_count(self) -> int:
        return len(self.columns)

    def to_dict(self) -> dict:
        return {
            "columns": [
                [placed.key.id if placed else None for placed in column]
                for column in self.columns
            ],
            "row_count": self.row_count,
            "column_count": self.column_count,
        }


class ColumnAssignmentStage:
    """
    Stage 2: Column Assignment.

    ЦКП: Минимальная сетка, согласованная с порядком клавиш слева направо.
    """

    def process(self, row_result: RowResult) -> ColumnResult:
        """
        Строит сетку колонок по рядам из Stage 1.

        Args:
            row_result: Результат Stage 1

        Returns:
            ColumnResult: Разреженная сетка
        """
        columns = assign_columns(row_result.rows)

        logger.debug(
            f"[Stage 2: Columns] {row_result.row_count} рядов -> {len(columns)} колонок"
        )

        return ColumnResult(columns=columns, row_count=row_result.row_count)
