"""
Реестр встроенных физических раскладок (presets.yaml).

Структура файла:
groups:
  <группа>:
    <имя пресета>:
      keys: [[w, h, x, y, r, rx, ry], ...]
      rc: [[row, col], ...]   # необязательно

Файл читается лениво, один раз на экземпляр реестра.
Использует Pydantic для валидации структуры.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from config.settings import PRESETS_FILE
from contracts.key_dto import Key

from ..domain.exceptions import (
    LayoutConfigurationError,
    LayoutFileNotFoundError,
    LayoutValidationError,
    PresetNotFoundError,
)
from ..inference.pipeline import LayoutInferencePipeline
from ..inference.s3_finalize.stage import sort_keys

KEY_RECORD_LENGTH = 7


class PresetDefinition(BaseModel):
    """Один пресет: геометрия клавиш и необязательные row/col."""

    keys: List[List[float]] = Field(..., min_length=1)
    rc: Optional[List[Tuple[int, int]]] = None

    @field_validator("keys")
    @classmethod
    def validate_key_records(cls, v: List[List[float]]) -> List[List[float]]:
        for index, record in enumerate(v):
            if len(record) != KEY_RECORD_LENGTH:
                raise ValueError(
                    f"keys[{index}]: ожидается [w, h, x, y, r, rx, ry], получено {len(record)} значений"
                )
        return v

    @model_validator(mode="after")
    def validate_rc(self) -> "PresetDefinition":
        if self.rc is None:
            return self
        if len(self.rc) != len(self.keys):
            raise ValueError(f"rc содержит {len(self.rc)} позиций на {len(self.keys)} клавиш")
        if len(set(self.rc)) != len(self.rc):
            raise ValueError("rc содержит повторяющиеся позиции")
        return self


class PresetsFile(BaseModel):
    groups: Dict[str, Dict[str, PresetDefinition]]


class PresetRegistry:
    """
    Ленивый реестр пресетов.

    Пример:
        registry = PresetRegistry()
        keys = registry.get("Ortho 4x4 Macropad")
    """

    def __init__(
        self,
        presets_file: Optional[Path] = None,
        pipeline: Optional[LayoutInferencePipeline] = None,
    ):
        self.presets_file = Path(presets_file) if presets_file else PRESETS_FILE
        self.pipeline = pipeline or LayoutInferencePipeline()
        self._groups: Optional[Dict[str, List[str]]] = None
        self._presets: Optional[Dict[str, PresetDefinition]] = None

    def groups(self) -> Dict[str, List[str]]:
        """Имена пресетов по группам, в порядке файла."""
        self._ensure_loaded()
        return {group: list(names) for group, names in self._groups.items()}

    def names(self) -> List[str]:
        self._ensure_loaded()
        return list(self._presets)

    def get(self, name: str) -> List[Key]:
        """
        Возвращает новые клавиши пресета (с новыми id).

        Raises:
            PresetNotFoundError: Если пресета с таким именем нет
            LayoutValidationError: Если геометрия клавиши некорректна (w=0, NaN)
        """
        self._ensure_loaded()
        definition = self._presets.get(name)
        if definition is None:
            raise PresetNotFoundError(
                message=f"Пресет '{name}' не найден. Доступные: {', '.join(self._presets)}",
                component="PresetRegistry"
            )

        keys = [self._make_key(name, index, record) for index, record in enumerate(definition.keys)]

        if definition.rc is not None:
            for key, (row, col) in zip(keys, definition.rc):
                key.row, key.col = row, col
            sort_keys(keys)
        else:
            self.pipeline.process(keys)

        logger.debug(f"[PresetRegistry] Пресет '{name}': {len(keys)} клавиш")
        return keys

    @staticmethod
    def _make_key(name: str, index: int, record: List[float]) -> Key:
        w, h, x, y, r, rx, ry = record
        try:
            return Key(w=w, h=h, x=x, y=y, r=r, rx=rx, ry=ry)
        except ValidationError as e:
            raise LayoutValidationError(
                message=f"Пресет '{name}': некорректная клавиша keys[{index}]",
                component="PresetRegistry",
                original_error=e
            )

    def _ensure_loaded(self) -> None:
        if self._presets is not None:
            return

        if not self.presets_file.exists():
            raise LayoutFileNotFoundError(
                message=f"Файл пресетов не найден: {self.presets_file}",
                component="PresetRegistry"
            )

        logger.debug(f"[PresetRegistry] Загрузка пресетов из {self.presets_file}")

        try:
            with open(self.presets_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
            parsed = PresetsFile.model_validate(data)
        except (yaml.YAMLError, ValidationError) as e:
            raise LayoutConfigurationError(
                message=f"Файл пресетов невалиден: {self.presets_file}",
                component="PresetRegistry",
                original_error=e
            )

        groups: Dict[str, List[str]] = {}
        presets: Dict[str, PresetDefinition] = {}
        for group, entries in parsed.groups.items():
            for name, definition in entries.items():
                if name in presets:
                    raise LayoutConfigurationError(
                        message=f"Пресет '{name}' объявлен в нескольких группах",
                        component="PresetRegistry"
                    )
                presets[name] = definition
                groups.setdefault(group, []).append(name)

        self._groups = groups
        self._presets = presets
        logger.info(f"[PresetRegistry] Загружено пресетов: {len(presets)}")
