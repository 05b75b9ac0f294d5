"""
Key Rotation: вспомогательные функции редактора поворота клавиш.

Два режима редактирования:
- Local center: клавиша вращается вокруг собственного центра
- Anchor: клавиша "смотрит" от якоря (rx, ry), её центр остаётся на месте

Все функции возвращают НОВУЮ клавишу (model_copy), входная не меняется.
Координаты результата округляются до ROUND_DECIMALS знаков.
"""

import math

from config.settings import ROUND_DECIMALS
from contracts.key_dto import ExplicitOrigin, Key, Point

from .kernel import effective_rotation_origin, rotate_point

__all__ = [
    "effective_rotation_origin",
    "unrotated_center",
    "rotated_center",
    "angle_between_points",
    "distance",
    "normalize_angle",
    "round_to",
    "normalize_to_local_center",
    "apply_local_center_rotation",
    "apply_anchor_rotation",
    "calculate_default_anchor_position",
    "move_anchor_without_affecting_position",
]


def unrotated_center(key: Key) -> Point:
    """Центр клавиши до поворота."""
    return Point(key.x + key.w / 2, key.y + key.h / 2)


def rotated_center(key: Key) -> Point:
    """Центр клавиши после поворота вокруг эффективного центра."""
    return rotate_point(unrotated_center(key), effective_rotation_origin(key), key.r)


def angle_between_points(start: Point, end: Point) -> float:
    """Угол направления start -> end в градусах: 0 = +x, 90 = +y (вниз)."""
    return math.degrees(math.atan2(end.y - start.y, end.x - start.x))


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def normalize_angle(angle: float) -> float:
    """Приводит угол к диапазону [0, 360)."""
    normalized = angle % 360
    # -1e-20 % 360 == 360.0 из-за округления
    if normalized >= 360:
        normalized -= 360
    return normalized


def round_to(value: float, decimals: int = ROUND_DECIMALS) -> float:
    return round(value, decimals)


def _with_pivot(key: Key, pivot: Point, **update) -> Key:
    """Копия клавиши с новыми полями и центром поворота pivot (округляется)."""
    origin = ExplicitOrigin(x=round_to(pivot.x), y=round_to(pivot.y))
    return key.model_copy(update=update).with_rotation_origin(origin)


# ============================================================================
# LOCAL CENTER ROTATION MODE
# ============================================================================

def normalize_to_local_center(key: Key) -> Key:
    """
    Переводит клавишу в режим вращения вокруг собственного центра.

    Центр поворота переносится в центр клавиши, визуальное положение
    не меняется: новый (x, y) подбирается так, чтобы центр совпал
    с текущим повёрнутым центром.
    """
    current_center = rotated_center(key)

    return _with_pivot(
        key,
        current_center,
        x=round_to(current_center.x - key.w / 2),
        y=round_to(current_center.y - key.h / 2),
    )


def apply_local_center_rotation(key: Key, delta_angle: float) -> Key:
    """
    Поворачивает клавишу вокруг её центра на delta_angle градусов.

    rx, ry обновляются под текущий центр (клавишу могли сдвинуть).
    """
    return _with_pivot(
        key,
        unrotated_center(key),
        r=round_to(normalize_angle(key.r + delta_angle)),
    )


# ============================================================================
# ANCHOR POINT ROTATION MODE
# ============================================================================

def apply_anchor_rotation(key: Key, new_anchor: Point) -> Key:
    """
    Перетаскивание якоря в режиме anchor rotation.

    Повёрнутый центр клавиши остаётся на месте, а сама клавиша
    разворачивается "спиной" к якорю: якорь прямо под клавишей => r = 0.

    Args:
        key: Текущая клавиша
        new_anchor: Новое положение якоря (юниты)

    Returns:
        Клавиша с новыми x, y, r, rx, ry
    """
    fixed_center = rotated_center(key)

    # -90 (центр над якорем) => 0, 0 (справа) => 90, 90 (под якорем) => 180
    new_r = normalize_angle(angle_between_points(new_anchor, fixed_center) + 90)

    # Ищем неповёрнутый центр, который после поворота вокруг якоря попадёт в fixed_center
    unrotated = rotate_point(fixed_center, new_anchor, -new_r)

    return _with_pivot(
        key,
        new_anchor,
        x=round_to(unrotated.x - key.w / 2),
        y=round_to(unrotated.y - key.h / 2),
        r=round_to(new_r),
    )


def calculate_default_anchor_position(key: Key, distance_from_center: float = 2) -> Point:
    """
    Положение якоря по умолчанию при переключении в anchor mode.

    Якорь ставится "под" клавишей в её собственной системе координат:
    направление r + 90 градусов в мировых координатах.
    """
    center = rotated_center(key)
    anchor_angle = math.radians(key.r + 90)

    return Point(
        round_to(center.x + distance_from_center * math.cos(anchor_angle)),
        round_to(center.y + distance_from_center * math.sin(anchor_angle)),
    )


def move_anchor_without_affecting_position(key: Key, new_anchor: Point) -> Key:
    """
    Переносит центр поворота, не сдвигая клавишу визуально.

    Угол не меняется; x, y пересчитываются так, чтобы повёрнутый центр
    остался там же.
    """
    fixed_center = rotated_center(key)
    unrotated = rotate_point(fixed_center, new_anchor, -key.r)

    return _with_pivot(
        key,
        new_anchor,
        x=round_to(unrotated.x - key.w / 2),
        y=round_to(unrotated.y - key.h / 2),
    )
