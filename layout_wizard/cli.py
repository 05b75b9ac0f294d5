"""
Точка входа layout-wizard: physical -> logical раскладка из файла или пресета.

Использование:
    # Импорт DTS / JSON / KLE (формат определяется по содержимому)
    layout-wizard board.dtsi

    # Явный формат, результат в файл
    layout-wizard keymap.json --format kle --output layout.json

    # Встроенный пресет, разметка половин, экспорт в KLE
    layout-wizard --preset "Split 3x5+2" --split --kle

Результат (JSON): {"keys": [{id, part, row, col, w, h, x, y, r, rx, ry}, ...]}
Статусные строки пишутся в stderr, результат без --output - в stdout.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from config.settings import LOG_LEVEL, ROW_TOLERANCE, validate_config

from .application import ImporterFactory, LayoutService, assign_split_sides
from .domain.exceptions import LayoutError


def _status(message: str) -> None:
    print(message, file=sys.stderr)


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="DEBUG" if verbose else LOG_LEVEL,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layout-wizard",
        description="Keyboard Layout Wizard: physical -> logical layout",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("path", nargs="?", help="Файл раскладки (DTS, JSON или KLE)")
    source.add_argument("--preset", help="Имя встроенного пресета")
    parser.add_argument(
        "--format",
        choices=sorted(ImporterFactory.IMPORTER_MAP),
        help="Формат файла (только вместе с path)",
    )
    parser.add_argument("--split", action="store_true", help="Разметить левую/правую половину (part)")
    parser.add_argument("--kle", action="store_true", help="Вывести KLE JSON вместо списка клавиш")
    parser.add_argument("--output", help="Файл результата (по умолчанию stdout)")
    parser.add_argument("--tolerance", type=float, default=ROW_TOLERANCE, help="Порог разрыва рядов (U)")
    parser.add_argument("--verbose", action="store_true", help="Подробное логирование")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI. Возвращает код выхода."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.preset and args.format:
        parser.error("--format задаёт формат файла и несовместим с --preset")

    configure_logging(args.verbose)

    # Проверяем конфигурацию
    try:
        validate_config()
    except ValueError as e:
        _status(f"[ERROR] {e}")
        return 1

    if args.tolerance <= 0:
        _status(f"[ERROR] --tolerance должен быть > 0, получено {args.tolerance}")
        return 1

    service = LayoutService(tolerance=args.tolerance)

    try:
        if args.preset:
            _status(f"[PROCESSING] Пресет: {args.preset}")
            keys = service.load_preset(args.preset, split=args.split)
        else:
            _status(f"[PROCESSING] Файл: {args.path}")
            keys = service.import_file(Path(args.path), args.format)
            if args.split:
                assign_split_sides(keys)

        if args.output:
            saved = service.save(keys, Path(args.output), kle=args.kle)
            _status(f"[SAVED] {len(keys)} клавиш: {saved}")
        elif args.kle:
            print(service.export_kle(keys))
        else:
            print(json.dumps(service.to_dict(keys), ensure_ascii=False, indent=2))

    except LayoutError as e:
        _status(f"[ERROR] {e}")
        return 1

    rows = max(key.row for key in keys) + 1 if keys else 0
    _status(f"[INFO] Клавиш: {len(keys)}, рядов: {rows}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
