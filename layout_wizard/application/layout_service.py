"""
Layout Service - точка сборки домена Layout.

Связывает импорт форматов, пресеты, вывод row/col и экспорт.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from config.settings import ROW_TOLERANCE
from contracts.key_dto import Key

from ..domain.interfaces import ILayoutExporter
from ..geometry.kernel import bounding_box_center, key_center, keys_bounding_box
from ..inference.pipeline import InferenceResult, LayoutInferencePipeline
from ..inference.s1_rows.stage import RowClusteringStage
from ..infrastructure.adapters import KleLayoutExporter
from ..infrastructure.file_manager import LayoutFileManager
from .factory import ImporterFactory
from .preset_registry import PresetRegistry


def assign_split_sides(keys: List[Key]) -> None:
    """
    Делит раскладку на две половины по центру bounding box.

    Клавиши с центром X <= центра раскладки получают part = 0, остальные part = 1.
    Пустой список - no-op.
    """
    if not keys:
        return

    middle_x = bounding_box_center(keys_bounding_box(keys)).x
    for key in keys:
        key.part = 0 if key_center(key).x <= middle_x else 1


class LayoutService:
    """
    Сервис раскладок.

    Пример:
        service = LayoutService()
        keys = service.import_file(Path("board.dtsi"))
        print(service.export_kle(keys))
    """

    def __init__(
        self,
        factory: Optional[ImporterFactory] = None,
        presets: Optional[PresetRegistry] = None,
        file_manager: Optional[LayoutFileManager] = None,
        exporter: Optional[ILayoutExporter] = None,
        tolerance: float = ROW_TOLERANCE,
    ):
        self.tolerance = tolerance
        self.pipeline = LayoutInferencePipeline(row_stage=RowClusteringStage(tolerance=tolerance))
        self.factory = factory or ImporterFactory(tolerance=tolerance)
        self.presets = presets or PresetRegistry(pipeline=self.pipeline)
        self.file_manager = file_manager or LayoutFileManager()
        self.exporter = exporter or KleLayoutExporter()

    def import_text(self, text: str, fmt: Optional[str] = None) -> List[Key]:
        """
        Импортирует раскладку из текста.

        Args:
            text: Содержимое файла
            fmt: dts / json / kle; None - определить по содержимому

        Raises:
            LayoutParseError: Если формат неизвестен или текст не разобран
        """
        importer = self.factory.get(fmt) if fmt else self.factory.detect(text)
        logger.info(f"[LayoutService] Импорт в формате {importer.format_name}")
        return importer.parse(text)

    def import_file(self, path: Path, fmt: Optional[str] = None) -> List[Key]:
        text = self.file_manager.read_text(Path(path))
        return self.import_text(text, fmt)

    def load_preset(self, name: str, split: bool = False) -> List[Key]:
        """Клавиши встроенного пресета; split=True размечает половины."""
        keys = self.presets.get(name)
        if split:
            assign_split_sides(keys)
        return keys

    def regenerate(self, keys: List[Key]) -> InferenceResult:
        """Заново выводит row/col для уже отредактированной раскладки."""
        return self.pipeline.process(keys)

    def export_kle(self, keys: List[Key]) -> str:
        return self.exporter.serialize(keys)

    def save(self, keys: List[Key], path: Path, kle: bool = False) -> Path:
        """
        Сохраняет раскладку: {"keys": [...]} или KLE JSON при kle=True.

        Raises:
            LayoutFileWriteError: Если файл не удалось записать
        """
        path = Path(path)
        if kle:
            return self.file_manager.save_text(self.export_kle(keys) + "\n", path)
        return self.file_manager.save_json(self.to_dict(keys), path)

    @staticmethod
    def to_dict(keys: List[Key]) -> Dict[str, Any]:
        return {"keys": [key.model_dump() for key in keys]}
