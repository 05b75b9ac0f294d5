"""
KLE Adapter: импорт и экспорт keyboard-layout-editor JSON.

Импорт принимает:
- сырой массив KLE
- VIA-обёртку {"layouts": {"keymap": [...]}}

Логическая позиция берётся из первой подписи клавиши: "r,c", "r/c"
или "r x c". Если подписи нет хотя бы у одной клавиши (или клетки
повторяются), row/col выводятся по геометрии.

Защита от мусорных подписей: если рядов больше, чем
ROW_HEIGHT_RATIO_LIMIT * физическая высота, вывод перезапускается
стратегией GAPS.
"""

import json
import re
from typing import Any, List, Optional, Tuple

from loguru import logger

from config.settings import ROW_HEIGHT_RATIO_LIMIT
from contracts.key_dto import ExplicitOrigin, Key, Point

from ...domain.interfaces import ILayoutExporter
from ...geometry.kernel import effective_rotation_origin
from ...inference.pipeline import LayoutInferencePipeline
from ...inference.s1_rows.stage import RowClusteringStage
from ...inference.s3_finalize.stage import sort_keys
from .. import kle
from .base import BaseLayoutImporter

POSITION_LABEL_RE = re.compile(r"\s*(-?\d+)\s*[,/x]\s*(-?\d+)\s*$", re.IGNORECASE)


def parse_position_label(label: Optional[str]) -> Optional[Tuple[int, int]]:
    """Разбирает подпись вида "2,3" / "2/3" / "2 x 3" в (row, col)."""
    if not label:
        return None
    match = POSITION_LABEL_RE.search(label.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def physical_height(keys: List[Key]) -> float:
    """Высота раскладки без учёта поворота: max(y + h) - min(y)."""
    return max(key.y + key.h for key in keys) - min(key.y for key in keys)


class KleLayoutImporter(BaseLayoutImporter):
    """Импорт раскладки из KLE / VIA JSON."""

    def __init__(
        self,
        pipeline: Optional[LayoutInferencePipeline] = None,
        assume_ordered: bool = False,
        row_height_ratio_limit: float = ROW_HEIGHT_RATIO_LIMIT,
    ):
        super().__init__(pipeline=pipeline, assume_ordered=assume_ordered)
        self.row_height_ratio_limit = row_height_ratio_limit
        # Повторный вывод всегда идёт по разрывам Y
        self.fallback_pipeline = LayoutInferencePipeline(
            row_stage=RowClusteringStage(tolerance=self.pipeline.row_stage.tolerance),
        )

    @property
    def format_name(self) -> str:
        return "kle"

    def parse(self, text: str) -> List[Key]:
        try:
            root = json.loads(text)
        except json.JSONDecodeError as e:
            raise self._fail("Некорректный JSON", e)

        rows = self._extract_rows(root)

        try:
            kle_keys = kle.deserialize(rows)
        except (ValueError, TypeError) as e:
            raise self._fail("Не удалось декодировать KLE", e)

        if not kle_keys:
            raise self._fail("KLE не содержит клавиш")

        keys = [self._to_key(kle_key) for kle_key in kle_keys]

        if self._has_label_positions(keys):
            sort_keys(keys)
        else:
            self._infer(keys)

        self._guard_row_count(keys)

        logger.info(f"[KleLayoutImporter] Импортировано {len(keys)} клавиш")
        return keys

    def _extract_rows(self, root: Any) -> List[Any]:
        if isinstance(root, list) and root:
            return root

        if isinstance(root, dict):
            layouts = root.get("layouts")
            keymap = layouts.get("keymap") if isinstance(layouts, dict) else None
            if isinstance(keymap, list) and keymap:
                return keymap

        raise self._fail("Ожидается массив KLE или объект VIA с layouts.keymap")

    def _to_key(self, kle_key: kle.KleKey) -> Key:
        fields = {
            "x": kle_key.x,
            "y": kle_key.y,
            "w": kle_key.width,
            "h": kle_key.height,
            "r": kle_key.rotation_angle,
        }
        position = parse_position_label(kle_key.first_label())
        if position is not None:
            fields["row"], fields["col"] = position
        # В KLE rx=ry=0 - это поворот вокруг начала координат (0, 0)
        origin = ExplicitOrigin(x=kle_key.rotation_x, y=kle_key.rotation_y)
        return self._make_key(**fields).with_rotation_origin(origin)

    @staticmethod
    def _has_label_positions(keys: List[Key]) -> bool:
        if any(not key.has_logical_position for key in keys):
            return False
        cells = {(key.row, key.col) for key in keys}
        if len(cells) != len(keys):
            logger.warning("[KleLayoutImporter] Подписи row,col повторяются, выводим по геометрии")
            return False
        return True

    def _guard_row_count(self, keys: List[Key]) -> None:
        total_rows = max(key.row for key in keys) + 1
        height = physical_height(keys)
        if total_rows > height * self.row_height_ratio_limit:
            logger.warning(
                f"[KleLayoutImporter] {total_rows} рядов при высоте {height:.2f}U, "
                f"перезапуск вывода"
            )
            self.fallback_pipeline.process(keys)


class KleLayoutExporter(ILayoutExporter):
    """Экспорт раскладки в KLE JSON; первая подпись клавиши - "row,col"."""

    def serialize(self, keys: List[Key]) -> str:
        kle_keys = [_to_kle_key(key) for key in keys]
        logger.debug(f"[KleLayoutExporter] Экспорт {len(kle_keys)} клавиш")
        return json.dumps(kle.serialize(kle_keys))


def _to_kle_key(key: Key) -> kle.KleKey:
    # Для KLE центр поворота всегда явный; без поворота он не важен
    origin = effective_rotation_origin(key) if key.r else Point(0.0, 0.0)
    return kle.KleKey(
        x=key.x,
        y=key.y,
        width=key.w,
        height=key.h,
        rotation_angle=key.r,
        rotation_x=origin.x,
        rotation_y=origin.y,
        labels=[f"{key.row},{key.col}"],
    )
