"""
KLE (keyboard-layout-editor.com) JSON: декодер и энкодер геометрии.

Поддерживается только то, что нужно раскладке: позиция, размер,
поворот и подписи. Цвета, профили и размеры шрифтов пропускаются.

Семантика рядов KLE:
- Каждый ряд - список; строка = клавиша, словарь = свойства следующей клавиши
- x/y в словаре - смещения курсора; после клавиши курсор сдвигается на её ширину
- w/h действуют на одну клавишу
- r/rx/ry задают кластер поворота; смена rx/ry сбрасывает курсор в (rx, ry)
- Конец ряда: y += 1, x = rx
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

KEY_MAX_LABELS = 12
DEFAULT_ALIGNMENT = 4

# Позиция подписи в строке KLE -> нормализованная позиция, по флагам выравнивания
# fmt: off
LABEL_MAP: List[List[int]] = [
    # 0  1  2  3  4  5  6  7  8  9 10 11   # align flags
    [ 0, 6, 2, 8, 9,11, 3, 5, 1, 4, 7,10], # 0 = no centering
    [ 1, 7,-1,-1, 9,11, 4,-1,-1,-1,-1,10], # 1 = center x
    [ 3,-1, 5,-1, 9,11,-1,-1, 4,-1,-1,10], # 2 = center y
    [ 4,-1,-1,-1, 9,11,-1,-1,-1,-1,-1,10], # 3 = center x & y
    [ 0, 6, 2, 8,10,-1, 3, 5, 1, 4, 7,-1], # 4 = center front (default)
    [ 1, 7,-1,-1,10,-1, 4,-1,-1,-1,-1,-1], # 5 = center front & x
    [ 3,-1, 5,-1,10,-1,-1,-1, 4,-1,-1,-1], # 6 = center front & y
    [ 4,-1,-1,-1,10,-1,-1,-1,-1,-1,-1,-1], # 7 = center front & x & y
]
# fmt: on


@dataclass
class KleKey:
    """Клавиша KLE в абсолютных координатах (юниты)."""
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0
    rotation_angle: float = 0.0
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    labels: List[Optional[str]] = field(default_factory=list)
    decal: bool = False

    def first_label(self) -> Optional[str]:
        """Первая непустая подпись в нормализованном порядке."""
        for label in self.labels:
            if isinstance(label, str) and label.strip():
                return label
        return None


def _reorder_labels(items: List[str], align: int) -> List[Optional[str]]:
    if not 0 <= align < len(LABEL_MAP):
        align = DEFAULT_ALIGNMENT
    labels: List[Optional[str]] = KEY_MAX_LABELS * [None]
    for i, item in enumerate(items[:KEY_MAX_LABELS]):
        index = LABEL_MAP[align][i]
        if item and index >= 0:
            labels[index] = item
    while labels and labels[-1] is None:
        labels.pop()
    return labels


def deserialize(rows: List[Any]) -> List[KleKey]:
    """
    Декодирует массив KLE в список клавиш.

    Args:
        rows: Корневой массив KLE (первый элемент может быть словарём метаданных)

    Returns:
        Клавиши в порядке появления

    Raises:
        ValueError: Если структура не похожа на KLE
    """
    if not isinstance(rows, list):
        raise ValueError("Expected a list of rows")

    keys: List[KleKey] = []
    current = KleKey()
    cluster_x, cluster_y = 0.0, 0.0
    align = DEFAULT_ALIGNMENT

    for row_index, row in enumerate(rows):
        if isinstance(row, dict) and row_index == 0:
            # Метаданные клавиатуры: нам не нужны
            continue
        if not isinstance(row, list):
            raise ValueError(f"Unexpected row type at index {row_index}: {type(row).__name__}")

        for item_index, item in enumerate(row):
            if isinstance(item, str):
                keys.append(KleKey(
                    x=current.x,
                    y=current.y,
                    width=current.width,
                    height=current.height,
                    rotation_angle=current.rotation_angle,
                    rotation_x=current.rotation_x,
                    rotation_y=current.rotation_y,
                    labels=_reorder_labels(item.split("\n"), align),
                    decal=current.decal,
                ))

                current.x = round(current.x + current.width, 6)
                current.width = 1.0
                current.height = 1.0
                current.decal = False

            elif isinstance(item, dict):
                if item_index != 0 and ("r" in item or "rx" in item or "ry" in item):
                    raise ValueError("Rotation can only be specified on the first key in the row")
                if "r" in item:
                    current.rotation_angle = float(item["r"])
                if "rx" in item:
                    cluster_x = float(item["rx"])
                    current.rotation_x = cluster_x
                    current.x, current.y = cluster_x, cluster_y
                if "ry" in item:
                    cluster_y = float(item["ry"])
                    current.rotation_y = cluster_y
                    current.x, current.y = cluster_x, cluster_y
                if "a" in item:
                    align = int(item["a"])
                if "x" in item:
                    current.x = round(current.x + float(item["x"]), 6)
                if "y" in item:
                    current.y = round(current.y + float(item["y"]), 6)
                if "w" in item:
                    current.width = float(item["w"])
                if "h" in item:
                    current.height = float(item["h"])
                if "d" in item:
                    current.decal = bool(item["d"])
            else:
                raise ValueError(f"Unexpected item type in row {row_index}: {type(item).__name__}")

        # Конец ряда
        current.y = round(current.y + 1, 6)
        current.x = current.rotation_x

    return keys


def serialize(keys: List[KleKey]) -> List[Any]:
    """
    Кодирует клавиши в массив рядов KLE.

    Новый ряд начинается при смене y или кластера поворота.
    Свойства пишутся только если отличаются от текущего состояния курсора.
    """
    rows: List[Any] = []
    row: List[Any] = []

    cur_x, cur_y = 0.0, -1.0  # y увеличится на первом ряду
    cur_r, cur_rx, cur_ry = 0.0, 0.0, 0.0
    cluster = (0.0, 0.0, 0.0)

    for key in keys:
        props: Dict[str, Any] = {}

        def add_prop(name: str, value: float, default: float) -> float:
            value = round(value, 6)
            if value != round(default, 6):
                props[name] = value
            return value

        new_cluster = (key.rotation_angle, key.rotation_x, key.rotation_y) != cluster
        new_row = key.y != cur_y
        if row and (new_cluster or new_row):
            rows.append(row)
            row = []
            new_row = True

        if new_row:
            cur_y = round(cur_y + 1, 6)
            # Смена rx/ry в KLE сбрасывает y в ry
            if key.rotation_y != cluster[2] or key.rotation_x != cluster[1]:
                cur_y = key.rotation_y
            cur_x = key.rotation_x
            cluster = (key.rotation_angle, key.rotation_x, key.rotation_y)

        cur_r = add_prop("r", key.rotation_angle, cur_r)
        cur_rx = add_prop("rx", key.rotation_x, cur_rx)
        cur_ry = add_prop("ry", key.rotation_y, cur_ry)

        x_offset = add_prop("x", key.x - cur_x, 0)
        y_offset = add_prop("y", key.y - cur_y, 0)
        cur_x = round(cur_x + key.width + x_offset, 6)
        cur_y = round(cur_y + y_offset, 6)

        add_prop("w", key.width, 1)
        add_prop("h", key.height, 1)

        if props:
            row.append(props)

        labels = ["" if not label else label for label in key.labels]
        row.append("\n".join(labels).rstrip("\n"))

    if row:
        rows.append(row)

    return rows
