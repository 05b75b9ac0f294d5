"""
Geometry Kernel: геометрия клавиш в юнитах.

ЦКП: Абсолютный полигон, центр и bounding box клавиши с учётом поворота.

Модель поворота:
1. Прямоугольник ставится в (x, y)
2. Вся фигура (не только центр) поворачивается на r градусов
   вокруг эффективного центра поворота (rx, ry или (x, y), если rx=ry=0)

Система координат экранная: Y вниз, положительный угол = по часовой стрелке.
Градусы переводятся в радианы только в точке использования.
"""

from typing import List, Sequence, Tuple

import numpy as np

from config.settings import DEFAULT_KEY_SIZE_PX
from contracts.key_dto import BoundingBox, ExplicitOrigin, Key, Point

from ..domain.exceptions import EmptyLayoutError


def effective_rotation_origin(key: Key) -> Point:
    """Центр поворота клавиши в юнитах (rx=ry=0 означает собственный угол (x, y))."""
    origin = key.rotation_origin
    if isinstance(origin, ExplicitOrigin):
        return Point(origin.x, origin.y)
    return Point(key.x, key.y)


def _rotation_matrix(angle_deg: float) -> np.ndarray:
    rad = np.deg2rad(angle_deg)
    cos, sin = np.cos(rad), np.sin(rad)
    return np.array([[cos, -sin], [sin, cos]])


def _rotate_array(points: np.ndarray, origin: Point, angle_deg: float) -> np.ndarray:
    """Поворачивает массив точек (N x 2) вокруг origin."""
    pivot = np.array([origin.x, origin.y])
    return (points - pivot) @ _rotation_matrix(angle_deg).T + pivot


def rotate_point(point: Point, origin: Point, angle_deg: float) -> Point:
    """
    Поворачивает точку вокруг origin.

    Args:
        point: Точка
        origin: Центр поворота (в тех же единицах)
        angle_deg: Угол в градусах (положительный = по часовой)

    Returns:
        Повёрнутая точка
    """
    rotated = _rotate_array(np.array([[point.x, point.y]], dtype=float), origin, angle_deg)[0]
    return Point(float(rotated[0]), float(rotated[1]))


def key_polygon(key: Key) -> List[Point]:
    """
    Полигон клавиши: 4 угла после поворота.

    Порядок углов сохраняется: 0 = исходный левый верхний,
    1 = правый верхний, 2 = правый нижний, 3 = левый нижний.

    Args:
        key: Клавиша в юнитах

    Returns:
        Ровно 4 точки в юнитах
    """
    corners = np.array([
        [key.x, key.y],
        [key.x + key.w, key.y],
        [key.x + key.w, key.y + key.h],
        [key.x, key.y + key.h],
    ], dtype=float)

    # Без поворота координаты остаются точными (важно для порогов кластеризации)
    if key.r:
        corners = _rotate_array(corners, effective_rotation_origin(key), key.r)

    return [Point(float(px), float(py)) for px, py in corners]


def polygon_bounding_box(points: Sequence[Point]) -> BoundingBox:
    """
    Bounding box набора точек.

    Raises:
        EmptyLayoutError: Если точек нет
    """
    if not points:
        raise EmptyLayoutError(
            message="Bounding box не определён для пустого набора точек",
            component="geometry",
        )

    coords = np.array([[p.x, p.y] for p in points], dtype=float)
    mins = coords.min(axis=0)
    maxs = coords.max(axis=0)
    return BoundingBox(
        min=Point(float(mins[0]), float(mins[1])),
        max=Point(float(maxs[0]), float(maxs[1])),
    )


def bounding_box_center(bbox: BoundingBox) -> Point:
    """Центр bounding box."""
    return Point((bbox.min.x + bbox.max.x) / 2, (bbox.min.y + bbox.max.y) / 2)


def key_center(key: Key) -> Point:
    """
    Центр клавиши после поворота.

    Считается как середина bounding box полигона, а не среднее углов.
    Для прямоугольника это одно и то же, но bbox устойчив к
    непрямоугольным фигурам.
    """
    return bounding_box_center(polygon_bounding_box(key_polygon(key)))


def keys_bounding_box(keys: Sequence[Key]) -> BoundingBox:
    """
    Bounding box объединения полигонов всех клавиш.

    Raises:
        EmptyLayoutError: Если клавиш нет (вместо бесконечных границ)
    """
    if not keys:
        raise EmptyLayoutError(
            message="Bounding box не определён для пустой раскладки",
            component="geometry",
        )

    points = [point for key in keys for point in key_polygon(key)]
    return polygon_bounding_box(points)


def scale_polygon(points: Sequence[Point], key_size: float = DEFAULT_KEY_SIZE_PX) -> List[Point]:
    """Переводит точки из юнитов в пиксели."""
    return [Point(p.x * key_size, p.y * key_size) for p in points]


def project_polygon(polygon: Sequence[Point], axis: Point) -> Tuple[float, float]:
    """
    Проекция полигона на ось.

    Args:
        polygon: Точки полигона
        axis: Вектор оси (нормировать не обязательно)

    Returns:
        (min, max) скалярных проекций
    """
    coords = np.array([[p.x, p.y] for p in polygon], dtype=float)
    projections = coords @ np.array([axis.x, axis.y], dtype=float)
    return float(projections.min()), float(projections.max())


def polygons_intersect(poly_a: Sequence[Point], poly_b: Sequence[Point]) -> bool:
    """
    Пересекаются ли два выпуклых полигона (separating axis test).

    Касание краями считается пересечением.
    """
    for polygon in (poly_a, poly_b):
        count = len(polygon)
        for i in range(count):
            p1 = polygon[i]
            p2 = polygon[(i + 1) % count]
            normal = Point(-(p2.y - p1.y), p2.x - p1.x)

            min_a, max_a = project_polygon(poly_a, normal)
            min_b, max_b = project_polygon(poly_b, normal)

            if max_a < min_b or max_b < min_a:
                return False

    return True


def point_in_polygon(polygon: Sequence[Point], x: float, y: float) -> bool:
    """Лежит ли точка (x, y) внутри полигона (ray casting)."""
    inside = False
    count = len(polygon)
    for i in range(count):
        a = polygon[i]
        b = polygon[(i + 1) % count]
        if (a.y > y) != (b.y > y):
            cross_x = (b.x - a.x) * (y - a.y) / (b.y - a.y) + a.x
            if x < cross_x:
                inside = not inside
    return inside
