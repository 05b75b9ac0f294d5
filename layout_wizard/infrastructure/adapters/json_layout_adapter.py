"""
JSON Adapter: импорт раскладки в стиле QMK info.json.

    {"layouts": {"LAYOUT": {"layout": [
        {"x": 0, "y": 0, "w": 1, "row": 0, "col": 0, "matrix": [0, 0]},
        ...
    ]}}}

Берётся первая раскладка из layouts. row/col читаются из полей row/col,
иначе из matrix = [row, col]. Если хотя бы у одной клавиши позиции нет
или порядок (row, col) не строго возрастает, row/col выводятся заново.
"""

import json
from typing import Any, List, Optional

from loguru import logger

from contracts.key_dto import Key

from .base import BaseLayoutImporter


def _as_number(value: Any) -> Optional[float]:
    # bool - подкласс int, но числом здесь не считается
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _is_row_major(keys: List[Key]) -> bool:
    """True, если (row, col) строго возрастают по списку."""
    positions = [(key.row, key.col) for key in keys]
    return all(prev < cur for prev, cur in zip(positions, positions[1:]))


class JsonLayoutImporter(BaseLayoutImporter):
    """Импорт раскладки из JSON (layouts -> первая раскладка -> layout)."""

    @property
    def format_name(self) -> str:
        return "json"

    def parse(self, text: str) -> List[Key]:
        try:
            root = json.loads(text)
        except json.JSONDecodeError as e:
            raise self._fail("Некорректный JSON", e)

        items = self._layout_items(root)
        keys = [self._parse_item(index, item) for index, item in enumerate(items)]

        if not keys:
            raise self._fail("Раскладка не содержит клавиш")

        if any(not key.has_logical_position for key in keys):
            logger.debug("[JsonLayoutImporter] Не у всех клавиш есть row/col")
            self._infer(keys)
        elif not _is_row_major(keys):
            logger.debug("[JsonLayoutImporter] row/col не упорядочены, выводим заново")
            self._infer(keys)

        logger.info(f"[JsonLayoutImporter] Импортировано {len(keys)} клавиш")
        return keys

    def _layout_items(self, root: Any) -> List[Any]:
        if not isinstance(root, dict) or not isinstance(root.get("layouts"), dict):
            raise self._fail("Ожидается объект с полем layouts")

        layouts = root["layouts"]
        if not layouts:
            raise self._fail("Поле layouts пустое")

        name, first = next(iter(layouts.items()))
        if not isinstance(first, dict) or not isinstance(first.get("layout"), list):
            raise self._fail(f"Раскладка {name!r} не содержит массива layout")

        return first["layout"]

    def _parse_item(self, index: int, item: Any) -> Key:
        if not isinstance(item, dict):
            raise self._fail(f"Элемент layout[{index}] не является объектом")

        x, y = _as_number(item.get("x")), _as_number(item.get("y"))
        if x is None or y is None:
            raise self._fail(f"У элемента layout[{index}] нет числовых x/y")

        fields = {"x": x, "y": y}
        for name in ("w", "h", "r", "rx", "ry"):
            value = _as_number(item.get(name))
            if value is not None:
                fields[name] = value

        row, col = _as_number(item.get("row")), _as_number(item.get("col"))
        matrix = item.get("matrix")
        if (row is None or col is None) and isinstance(matrix, list) and len(matrix) == 2:
            row, col = _as_number(matrix[0]), _as_number(matrix[1])
        if row is not None and col is not None:
            fields["row"], fields["col"] = row, col

        return self._make_key(**fields)
