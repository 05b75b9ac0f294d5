"""
Keyboard Layout Wizard: вывод логической раскладки (row/col) из физической геометрии.

Слои:
- geometry: полигоны, центры, поворот
- inference: 3-этапный пайплайн physical -> logical
- infrastructure: форматы DTS / JSON / KLE, файлы
- application: фабрика импортёров, пресеты, сервис
"""

from .inference import infer_logical_layout

__version__ = "0.1.0"

__all__ = ["infer_logical_layout"]
