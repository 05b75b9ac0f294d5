"""
Importer Factory - выбор адаптера формата раскладки.

По имени формата (dts / json / kle) или по содержимому текста.
"""

import json
from typing import Callable, Dict, Optional

from loguru import logger

from config.settings import ROW_TOLERANCE

from ..domain.exceptions import LayoutParseError
from ..domain.interfaces import ILayoutImporter
from ..inference.pipeline import LayoutInferencePipeline
from ..inference.s1_rows.stage import RowClusteringStage, RowStrategy
from ..infrastructure.adapters import DtsLayoutImporter, JsonLayoutImporter, KleLayoutImporter

ImporterBuilder = Callable[..., ILayoutImporter]


class ImporterFactory:
    """
    Фабрика импортёров.

    Пример:
        factory = ImporterFactory()
        importer = factory.get("kle")
        keys = importer.parse(text)
    """

    # Маппинг форматов на классы импортёров
    IMPORTER_MAP: Dict[str, ImporterBuilder] = {
        "dts": DtsLayoutImporter,
        "json": JsonLayoutImporter,
        "kle": KleLayoutImporter,
    }

    def __init__(self, assume_ordered: bool = False, tolerance: float = ROW_TOLERANCE):
        self.assume_ordered = assume_ordered
        self.tolerance = tolerance
        self._importers: Dict[str, ImporterBuilder] = dict(self.IMPORTER_MAP)

    @property
    def formats(self):
        return sorted(self._importers)

    def get(self, fmt: str) -> ILayoutImporter:
        """
        Получить импортёр для формата.

        Raises:
            LayoutParseError: Если формат неизвестен
        """
        normalized = fmt.strip().lower()
        builder = self._importers.get(normalized)
        if builder is None:
            raise LayoutParseError(
                message=f"Неизвестный формат '{fmt}'. Доступные: {', '.join(self.formats)}",
                component="ImporterFactory"
            )
        logger.debug(f"[ImporterFactory] Выбран формат: {normalized}")
        return builder(pipeline=self._make_pipeline(), assume_ordered=self.assume_ordered)

    def detect(self, text: str) -> ILayoutImporter:
        """
        Определить формат по содержимому.

        - есть "zmk,physical-layout" -> dts
        - JSON-массив или объект с layouts.keymap -> kle
        - JSON-объект с layouts -> json
        """
        fmt = self.detect_format(text)
        if fmt is None:
            raise LayoutParseError(
                message="Не удалось определить формат раскладки",
                component="ImporterFactory"
            )
        return self.get(fmt)

    def _make_pipeline(self) -> LayoutInferencePipeline:
        strategy = RowStrategy.ORDERED if self.assume_ordered else RowStrategy.GAPS
        return LayoutInferencePipeline(
            row_stage=RowClusteringStage(tolerance=self.tolerance, strategy=strategy),
        )

    @staticmethod
    def detect_format(text: str) -> Optional[str]:
        if "zmk,physical-layout" in text:
            return "dts"

        try:
            root = json.loads(text)
        except json.JSONDecodeError:
            return None

        if isinstance(root, list):
            return "kle"
        if isinstance(root, dict) and isinstance(root.get("layouts"), dict):
            if "keymap" in root["layouts"]:
                return "kle"
            return "json"
        return None

    def register(self, fmt: str, builder: ImporterBuilder) -> None:
        """Зарегистрировать импортёр для нового формата."""
        self._importers[fmt.lower()] = builder
        logger.info(f"[ImporterFactory] Зарегистрирован формат: {fmt}")
