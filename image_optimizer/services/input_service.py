"""Поиск входных изображений.

Принципы:
- Чистые функции: возвращают новый список, без общего изменяемого состояния.
- Порядок обхода стабилен (каталоги и файлы сортируются).
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from image_optimizer.errors import PathNotFound, TraversalError, UnsupportedFormat

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp")


def is_image_file(path: str | Path) -> bool:
    """Проверяет расширение файла без учёта регистра."""
    return os.path.splitext(str(path))[1].lower() in SUPPORTED_EXTENSIONS


def find_image_files(directory: str | Path) -> List[Path]:
    """Рекурсивно собирает все поддерживаемые изображения в каталоге.

    Raises:
        TraversalError: если каталог не читается (в том числе если его нет).
    """
    def _raise(exc: OSError) -> None:
        raise TraversalError(f"Fehler beim Lesen des Ordners: {exc}") from exc

    files: List[Path] = []
    for root, dirs, names in os.walk(directory, onerror=_raise):
        dirs.sort()
        for name in sorted(names):
            if is_image_file(name):
                files.append(Path(root) / name)
    logger.debug("Found %d image(s) under %s", len(files), directory)
    return files


def resolve_inputs(path: str | Path) -> List[Path]:
    """Возвращает список файлов для обработки по пути из командной строки.

    Raises:
        PathNotFound: путь не существует.
        UnsupportedFormat: одиночный файл с неподдерживаемым расширением.
        TraversalError: ошибка обхода каталога.
    """
    source = Path(path)
    if not source.exists():
        raise PathNotFound(f"Pfad nicht gefunden: {source}")
    if source.is_dir():
        return find_image_files(source)
    if not is_image_file(source):
        raise UnsupportedFormat("Datei ist kein unterstütztes Bildformat")
    return [source]
