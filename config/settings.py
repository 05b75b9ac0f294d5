"""
Настройки проекта Layout Wizard.

Все пороги алгоритма вывода логической раскладки задаются здесь.
Любую настройку с переменной окружения можно переопределить без правки кода.
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
PACKAGE_DIR = PROJECT_ROOT / "layout_wizard"

# Встроенные пресеты физических раскладок
PRESETS_FILE = Path(os.getenv(
    "LAYOUT_PRESETS_FILE",
    str(PACKAGE_DIR / "presets" / "presets.yaml")
))

# =============================================================================
# ВЫВОД ЛОГИЧЕСКОЙ РАСКЛАДКИ (physical -> logical)
# =============================================================================
# Разрыв по Y между центрами клавиш (в юнитах), начиная с которого
# открывается новый ряд. Половина стандартного шага клавиши.
ROW_TOLERANCE = float(os.getenv("LAYOUT_ROW_TOLERANCE", "0.5"))

# Допуск "разрыва ряда" по X для уже упорядоченного ввода (быстрый путь).
# Ключ, центр которого левее предыдущего + допуск, начинает новый ряд.
SAME_ROW_BREAK_TOLERANCE = float(os.getenv("LAYOUT_SAME_ROW_BREAK_TOLERANCE", "0.4"))

# KLE: если рядов больше, чем физическая высота * этот множитель,
# разметка из подписей считается мусором и вывод перезапускается.
ROW_HEIGHT_RATIO_LIMIT = float(os.getenv("LAYOUT_ROW_HEIGHT_RATIO_LIMIT", "2.0"))

# =============================================================================
# ФОРМАТЫ
# =============================================================================
# DTS хранит w/h/x/y/r/rx/ry как целые * 100
DTS_FIXED_POINT_SCALE = 100

# Размер 1U в пикселях (для потребителей, которые рисуют раскладку)
DEFAULT_KEY_SIZE_PX = 70

# Точность округления координат в редакторе поворота
ROUND_DECIMALS = 3

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("LAYOUT_LOG_LEVEL", "INFO")


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if ROW_TOLERANCE <= 0:
        errors.append(f"ROW_TOLERANCE должен быть > 0, получено {ROW_TOLERANCE}")

    if SAME_ROW_BREAK_TOLERANCE <= 0:
        errors.append(
            f"SAME_ROW_BREAK_TOLERANCE должен быть > 0, получено {SAME_ROW_BREAK_TOLERANCE}"
        )

    if ROW_HEIGHT_RATIO_LIMIT <= 0:
        errors.append(
            f"ROW_HEIGHT_RATIO_LIMIT должен быть > 0, получено {ROW_HEIGHT_RATIO_LIMIT}"
        )

    if not PRESETS_FILE.exists():
        errors.append(f"Файл пресетов не найден: {PRESETS_FILE}")

    if errors:
        raise ValueError("\n".join(errors))

    return True
