"""
Контракты DTO проекта Layout Wizard.

Контракты:
- Адаптеры форматов -> ядро: Key, Point, BoundingBox (key_dto.py)
- Центр поворота: RotationOrigin = KeyOrigin | ExplicitOrigin
"""

from .key_dto import (
    Key,
    Point,
    BoundingBox,
    KeyOrigin,
    ExplicitOrigin,
    RotationOrigin,
    new_key_id,
)

__all__ = [
    "Key",
    "Point",
    "BoundingBox",
    "KeyOrigin",
    "ExplicitOrigin",
    "RotationOrigin",
    "new_key_id",
]
