"""Иерархия ошибок оптимизатора.

Две ветви:
- `FatalError`: ошибки до начала пакетной обработки, прерывают запуск (код выхода 1).
- `ProcessingError`: ошибки отдельного файла, файл пропускается, пакет продолжается.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class OptimizerError(Exception):
    """Базовая ошибка приложения."""


class FatalError(OptimizerError):
    """Ошибка до обработки файлов: запуск прерывается."""


class ValidationError(FatalError):
    """Некорректные аргументы командной строки."""


class PathNotFound(FatalError):
    """Входной путь не существует."""


class UnsupportedFormat(FatalError):
    """Расширение одиночного файла не поддерживается."""


class TraversalError(FatalError):
    """Ошибка обхода каталога (нет доступа, каталог пропал и т.п.)."""


class OutputDirError(FatalError):
    """Не удалось создать каталог для результатов."""


class ProcessingError(OptimizerError):
    """Ошибка обработки одного файла."""

    stage = "processing"

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class DecodeError(ProcessingError):
    stage = "decode"


class EncodeError(ProcessingError):
    stage = "encode"
