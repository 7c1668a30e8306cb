"""Точка входа: разбор аргументов, проверка и запуск пакетной обработки."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from image_optimizer.controllers.batch_controller import NO_IMAGES_MESSAGE, BatchController
from image_optimizer.errors import FatalError, ValidationError
from image_optimizer.models.profile import OptimizationProfile
from image_optimizer.models.request import ProcessingRequest
from image_optimizer.services.input_service import resolve_inputs
from image_optimizer.services.output_service import resolve_output_dir

logger = logging.getLogger(__name__)

_TRUE = ("1", "t", "true", "y", "yes", "on")
_FALSE = ("0", "f", "false", "n", "no", "off")


class _ArgumentParser(argparse.ArgumentParser):
    """argparse завершает процесс с кодом 2; здесь ошибка превращается в `ValidationError`."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ValidationError(message)


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"ungültiger Wahrheitswert: {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="image-optimizer",
        description="Bilder für Web, Apps und Vorschaubilder optimieren.",
    )
    parser.add_argument("--path", help="Pfad zur Datei oder zum Ordner mit Bildern")
    parser.add_argument(
        "--type",
        default=OptimizationProfile.WEB.value,
        help="Typ der Optimierung: " + ", ".join(f"'{n}'" for n in OptimizationProfile.names()),
    )
    parser.add_argument(
        "--size",
        type=int,
        default=0,
        help="Maximale Höhe/Breite in Pixeln (0 = keine Größenänderung)",
    )
    parser.add_argument(
        "--output",
        default="",
        help="Ausgabeverzeichnis (Standard: optimized/ im Quellverzeichnis)",
    )
    parser.add_argument(
        "--overwrite",
        type=_parse_bool,
        nargs="?",
        const=True,
        default=False,
        help="Originaldateien überschreiben (Standard: false)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Ausführliche Protokollierung")
    return parser


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def validate_args(args: argparse.Namespace) -> OptimizationProfile:
    """Проверяет флаги в порядке: --path, --type, --size.

    Raises:
        ValidationError: при первой найденной ошибке.
    """
    if not args.path:
        raise ValidationError("--path ist erforderlich")
    profile = OptimizationProfile.parse(args.type)
    if args.size < 0:
        raise ValidationError("--size muss größer oder gleich 0 sein")
    return profile


def build_request(args: argparse.Namespace, profile: OptimizationProfile) -> ProcessingRequest:
    """Строит неизменяемый запрос; каталог назначения создаётся до обработки файлов.

    Raises:
        OutputDirError: если каталог не удалось создать.
    """
    source = Path(args.path)
    output_directory = resolve_output_dir(source, args.output or None, args.overwrite)
    return ProcessingRequest(
        source_path=source,
        output_directory=output_directory,
        max_dimension=args.size,
        profile=profile,
        overwrite_in_place=args.overwrite,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ValidationError as exc:
        logging.basicConfig(format="%(levelname)s: %(message)s")
        logger.error("%s", exc)
        parser.print_usage(sys.stderr)
        return 1

    setup_logging(args.verbose)
    try:
        profile = validate_args(args)
        files = resolve_inputs(args.path)
        if not files:
            print(NO_IMAGES_MESSAGE)
            return 0
        request = build_request(args, profile)
    except FatalError as exc:
        logger.error("%s", exc)
        if isinstance(exc, ValidationError):
            parser.print_usage(sys.stderr)
        return 1

    BatchController(request).run(files)
    return 0


if __name__ == "__main__":
    sys.exit(main())
