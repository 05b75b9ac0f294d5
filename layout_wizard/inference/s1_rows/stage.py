"""
Stage 1: Row Clustering

ЦКП: Разбиение клавиш на логические ряды по Y повёрнутого центра.

Input: List[Key] (row/col неизвестны)
Output: RowResult (ряды сверху вниз, клавиши в ряду слева направо)

Алгоритм (GAPS, основной):
1. Центр каждой клавиши с учётом поворота, Y нормируется на глобальный минимум
2. Сортировка по (y, x, id) - только внутренний шаг
3. Разрыв между соседними Y >= tolerance открывает новый ряд
4. Внутри ряда сортировка по X

Порог разрыва локальный: шаг рядов заранее неизвестен и бывает
неравномерным (thumb cluster ниже основных рядов на другой отступ).

Порядок входного списка на результат НЕ влияет. Совпадающие клавиши
различаются по id.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from loguru import logger

from config.settings import ROW_TOLERANCE, SAME_ROW_BREAK_TOLERANCE
from contracts.key_dto import Key, Point

from ...geometry.kernel import key_center


class RowStrategy(str, Enum):
    """Стратегия разбиения на ряды."""
    GAPS = "gaps"          # Разрывы по Y, не зависит от порядка (основная)
    ORDERED = "ordered"    # Разрывы по X для ввода в row-major порядке (быстрый путь)


@dataclass
class PlacedKey:
    """
    Клавиша вместе с её повёрнутым центром.

    center.y нормирован: самый верхний центр раскладки имеет y = 0.
    """
    key: Key
    center: Point

    @property
    def x(self) -> float:
        return self.center.x

    @property
    def y(self) -> float:
        return self.center.y


def place_keys(keys: Sequence[Key]) -> List[PlacedKey]:
    """Считает центры всех клавиш и один раз нормирует Y на глобальный минимум."""
    if not keys:
        return []

    centers = [key_center(key) for key in keys]
    min_y = min(center.y for center in centers)
    return [
        PlacedKey(key=key, center=Point(center.x, center.y - min_y))
        for key, center in zip(keys, centers)
    ]


def _row_order(placed: PlacedKey):
    return (placed.x, placed.y, placed.key.id)


def cluster_into_rows(keys: Sequence[Key], tolerance: float = ROW_TOLERANCE) -> List[List[PlacedKey]]:
    """
    Группирует клавиши в ряды по разрывам Y.

    Args:
        keys: Клавиши в любом порядке
        tolerance: Разрыв (юниты), начиная с которого открывается новый ряд.
                   Граница включительная: gap == tolerance => новый ряд.

    Returns:
        Ряды по возрастанию Y, клавиши в ряду по возрастанию X
    """
    placed = sorted(place_keys(keys), key=lambda p: (p.y, p.x, p.key.id))
    if not placed:
        return []

    rows: List[List[PlacedKey]] = [[placed[0]]]
    for previous, current in zip(placed, placed[1:]):
        if current.y - previous.y >= tolerance:
            rows.append([current])
        else:
            rows[-1].append(current)

    for row in rows:
        row.sort(key=_row_order)

    return rows


def cluster_by_x_breaks(
    keys: Sequence[Key],
    tolerance: float = SAME_ROW_BREAK_TOLERANCE,
) -> List[List[PlacedKey]]:
    """
    Быстрый путь для ввода, уже упорядоченного по рядам.

    Новый ряд начинается, когда X центра не продвинулся вправо
    хотя бы на tolerance относительно предыдущей клавиши ("перенос строки").
    Зависит от порядка ввода - использовать только для заведомо
    упорядоченных источников.
    """
    placed = place_keys(keys)
    if not placed:
        return []

    rows: List[List[PlacedKey]] = [[placed[0]]]
    for previous, current in zip(placed, placed[1:]):
        if current.x < previous.x + tolerance:
            rows.append([current])
        else:
            rows[-1].append(current)

    for row in rows:
        row.sort(key=_row_order)

    rows.sort(key=lambda row: sum(p.y for p in row) / len(row))
    return rows


@dataclass
class RowResult:
    """
    Результат Stage 1: Row Clustering.

    ЦКП: Ряды клавиш сверху вниз, внутри ряда слева направо.
    """
    rows: List[List[PlacedKey]] = field(default_factory=list)
    tolerance: float = ROW_TOLERANCE
    strategy: RowStrategy = RowStrategy.GAPS
    total_keys: int = 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict:
        return {
            "rows": [[placed.key.id for placed in row] for row in self.rows],
            "row_count": self.row_count,
            "tolerance": self.tolerance,
            "strategy": self.strategy.value,
            "total_keys": self.total_keys,
        }


class RowClusteringStage:
    """
    Stage 1: Row Clustering.

    ЦКП: Логические ряды из физических координат.
    """

    def __init__(
        self,
        tolerance: float = ROW_TOLERANCE,
        strategy: RowStrategy = RowStrategy.GAPS,
        break_tolerance: float = SAME_ROW_BREAK_TOLERANCE,
    ):
        """
        Args:
            tolerance: Порог разрыва Y для стратегии GAPS (юниты)
            strategy: GAPS (по умолчанию) или ORDERED
            break_tolerance: Порог "переноса строки" по X для стратегии ORDERED
        """
        self.tolerance = tolerance
        self.strategy = RowStrategy(strategy)
        self.break_tolerance = break_tolerance

    def process(self, keys: Sequence[Key]) -> RowResult:
        """
        Разбивает клавиши на ряды.

        Args:
            keys: Клавиши раскладки

        Returns:
            RowResult: Ряды клавиш
        """
        if not keys:
            logger.debug("[Stage 1: Rows] Нет клавиш для обработки")
            return RowResult(tolerance=self.tolerance, strategy=self.strategy)

        if self.strategy == RowStrategy.ORDERED:
            rows = cluster_by_x_breaks(keys, self.break_tolerance)
        else:
            rows = cluster_into_rows(keys, self.tolerance)

        logger.debug(
            f"[Stage 1: Rows] {len(keys)} клавиш -> {len(rows)} рядов "
            f"(strategy={self.strategy.value}, tolerance={self.tolerance})"
        )

        return RowResult(
            rows=rows,
            tolerance=self.tolerance,
            strategy=self.strategy,
            total_keys=len(keys),
        )
