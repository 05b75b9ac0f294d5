"""
DTS Adapter: импорт physical layout из devicetree.

Формат записи клавиши (целые * 100, допускаются скобки и минус):
    &key_physical_attrs 100 100 0 0 0 0 0
    &key_physical_attrs 100 100 (-50) 0 1500 (-25) 300
порядок: w h x y r rx ry

Сначала ищем блок с compatible = "zmk,physical-layout"; если в нём
клавиш нет, сканируем весь текст. row/col в DTS нет - вывод всегда.
"""

import re
from typing import List

from loguru import logger

from config.settings import DTS_FIXED_POINT_SCALE
from contracts.key_dto import Key

from .base import BaseLayoutImporter

COMPATIBLE_MARKER = "zmk,physical-layout"

LAYOUT_BLOCK_RE = re.compile(r'\{[^}]*?compatible *?= *?"zmk,physical-layout";.+?\}', re.S)
KEY_RECORD_RE = re.compile(r"&key_physical_attrs" + r"\s*\(?(-?\d+)\)?" * 7 + r"\s*")


class DtsLayoutImporter(BaseLayoutImporter):
    """Импорт раскладки из ZMK devicetree (physical layout)."""

    @property
    def format_name(self) -> str:
        return "dts"

    def parse(self, text: str) -> List[Key]:
        if COMPATIBLE_MARKER not in text:
            raise self._fail(f"В тексте нет узла {COMPATIBLE_MARKER}")

        block = LAYOUT_BLOCK_RE.search(text)
        keys = self._scan_keys(block.group(0) if block else text)

        if not keys and block:
            logger.warning("[DtsLayoutImporter] В блоке layout нет клавиш, сканируем весь DTS")
            keys = self._scan_keys(text)

        if not keys:
            raise self._fail("Не найдено ни одной записи &key_physical_attrs")

        self._infer(keys)
        logger.info(f"[DtsLayoutImporter] Импортировано {len(keys)} клавиш")
        return keys

    def _scan_keys(self, text: str) -> List[Key]:
        keys = []
        for match in KEY_RECORD_RE.finditer(text):
            w, h, x, y, r, rx, ry = (int(value) / DTS_FIXED_POINT_SCALE for value in match.groups())
            keys.append(self._make_key(w=w, h=h, x=x, y=y, r=r, rx=rx, ry=ry))
        return keys
