"""
DTO контракт: Key geometry (адаптеры форматов <-> ядро вывода раскладки).

Клавиша описывается в юнитах (1U = шаг стандартной клавиши):
- x, y: левый верхний угол ДО поворота
- w, h: ширина и высота
- r: угол поворота в градусах (по часовой стрелке, ось Y вниз)
- rx, ry: центр поворота. Если оба == 0, центром считается (x, y).

row/col: ВЫХОД ядра. На входе -1 означает "неизвестно".

ВАЖНО: Соглашение "rx=ry=0 => (x, y)" существует только на границе
сериализации. Внутри используем явный тип RotationOrigin.
"""

import math
import uuid
from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, Field, field_validator


@dataclass(frozen=True)
class Point:
    """Точка в юнитах (или пикселях, если явно масштабирована)."""
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Ось-ориентированный прямоугольник: min - левый верхний, max - правый нижний."""
    min: Point
    max: Point

    @property
    def width(self) -> float:
        return self.max.x - self.min.x

    @property
    def height(self) -> float:
        return self.max.y - self.min.y


@dataclass(frozen=True)
class KeyOrigin:
    """Поворот вокруг собственного левого верхнего угла клавиши (x, y)."""


@dataclass(frozen=True)
class ExplicitOrigin:
    """Поворот вокруг явно заданной абсолютной точки."""
    x: float
    y: float


RotationOrigin = Union[KeyOrigin, ExplicitOrigin]


def new_key_id() -> str:
    """Новый непрозрачный идентификатор клавиши."""
    return uuid.uuid4().hex


class Key(BaseModel):
    """
    Клавиша физической раскладки.

    Ядро меняет только row/col. Все остальные поля принадлежат
    адаптерам форматов и редактору.
    """

    id: str = Field(default_factory=new_key_id, min_length=1, description="Стабильный идентификатор")
    part: int = Field(0, description="Часть клавиатуры (0 для моноблока)")
    row: int = Field(-1, description="Ряд логической раскладки (НЕ ряд матрицы)")
    col: int = Field(-1, description="Колонка логической раскладки (НЕ колонка матрицы)")
    w: float = Field(1.0, gt=0, description="Ширина в юнитах")
    h: float = Field(1.0, gt=0, description="Высота в юнитах")
    x: float = Field(0.0, description="X левого верхнего угла до поворота")
    y: float = Field(0.0, description="Y левого верхнего угла до поворота")
    r: float = Field(0.0, description="Угол поворота, градусы по часовой")
    rx: float = Field(0.0, description="X центра поворота (0 вместе с ry => x)")
    ry: float = Field(0.0, description="Y центра поворота (0 вместе с rx => y)")

    @field_validator("w", "h", "x", "y", "r", "rx", "ry")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("Geometry values must be finite")
        return v

    @property
    def rotation_origin(self) -> RotationOrigin:
        if self.rx == 0 and self.ry == 0:
            return KeyOrigin()
        return ExplicitOrigin(x=self.rx, y=self.ry)

    def with_rotation_origin(self, origin: RotationOrigin) -> "Key":
        """
        Копия клавиши с новым центром поворота (в формате rx/ry).

        Единственное место, где пишется соглашение rx=ry=0.
        Явный центр ровно в (0, 0) так записать нельзя: он совпал бы с
        KeyOrigin. Поэтому угол клавиши поворачивается вокруг (0, 0)
        и сохраняется как KeyOrigin, полигон при этом тот же самый.
        """
        if isinstance(origin, KeyOrigin):
            return self.model_copy(update={"rx": 0.0, "ry": 0.0})

        if origin.x == 0 and origin.y == 0:
            if not self.r:
                return self.model_copy(update={"rx": 0.0, "ry": 0.0})
            rad = math.radians(self.r)
            cos, sin = math.cos(rad), math.sin(rad)
            return self.model_copy(update={
                "x": self.x * cos - self.y * sin,
                "y": self.x * sin + self.y * cos,
                "rx": 0.0,
                "ry": 0.0,
            })

        return self.model_copy(update={"rx": origin.x, "ry": origin.y})

    @property
    def has_logical_position(self) -> bool:
        return self.row >= 0 and self.col >= 0
