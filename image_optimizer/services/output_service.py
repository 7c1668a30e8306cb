"""Определение каталога и пути результата.

Правила переименования:
- профиль `app` всегда пишет PNG (`.png`);
- `.jpg`/`.jpeg` кодируются в JPEG с качеством профиля;
- `.png` остаётся PNG;
- остальные поддерживаемые расширения (`.gif`, `.bmp`, `.webp`) пишутся как PNG с `.png`.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from image_optimizer.errors import OutputDirError
from image_optimizer.models.request import OutputTarget, ProcessingRequest

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_SUBDIR = "optimized"

_JPEG_EXTENSIONS = (".jpg", ".jpeg")


def resolve_output_dir(source: str | Path, output_dir: Optional[str | Path] = None, overwrite: bool = False) -> Path:
    """Вычисляет каталог назначения до обработки файлов.

    Args:
        source: Входной файл или каталог (должен существовать).
        output_dir: Явный каталог результатов; игнорируется при `overwrite`.
        overwrite: Перезапись исходных файлов на месте.

    Returns:
        Путь к каталогу. Без `overwrite` каталог создаётся вместе с родителями.

    Raises:
        OutputDirError: если каталог не удалось создать.
    """
    source = Path(source)
    base = source if source.is_dir() else source.parent
    if overwrite:
        return base

    target = Path(output_dir) if output_dir else base / DEFAULT_OUTPUT_SUBDIR
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirError(f"Fehler beim Erstellen des Ausgabeordners: {exc}") from exc
    logger.debug("Output directory: %s", target)
    return target


def resolve_output_target(source_file: str | Path, request: ProcessingRequest) -> OutputTarget:
    """Возвращает путь и формат записи для одного файла."""
    source_file = Path(source_file)
    if request.overwrite_in_place:
        base_path = source_file
    else:
        base_path = request.output_directory / source_file.name

    ext = source_file.suffix.lower()
    profile = request.profile
    if not profile.forces_png and ext in _JPEG_EXTENSIONS:
        return OutputTarget(final_path=base_path, container_format="JPEG", jpeg_quality=profile.jpeg_quality)
    if not profile.forces_png and ext == ".png":
        return OutputTarget(final_path=base_path, container_format="PNG")

    final_path = base_path.with_suffix(".png")
    return OutputTarget(
        final_path=final_path,
        container_format="PNG",
        replaces_source=request.overwrite_in_place and final_path != source_file,
    )
