"""Запрос на обработку, цель записи и результаты.

`ProcessingRequest` строится один раз из проверенных аргументов и только
читается всеми шагами конвейера.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from image_optimizer.errors import ProcessingError
from image_optimizer.models.profile import OptimizationProfile


@dataclass(frozen=True)
class ProcessingRequest:
    """Параметры одного запуска.

    Fields:
        source_path: Файл или каталог на входе.
        output_directory: Каталог назначения (при перезаписи это каталог источника).
        max_dimension: Ограничение по длинной стороне, 0 = без изменения размера.
        profile: Профиль оптимизации.
        overwrite_in_place: Перезаписывать исходные файлы.
    """
    source_path: Path
    output_directory: Path
    max_dimension: int = 0
    profile: OptimizationProfile = OptimizationProfile.WEB
    overwrite_in_place: bool = False

    @property
    def target_dimension(self) -> int:
        """Фактическая граница ресайза с учётом размера профиля по умолчанию."""
        if self.max_dimension == 0:
            return self.profile.default_target
        return self.max_dimension


@dataclass(frozen=True)
class OutputTarget:
    """Куда и в каком формате записать результат."""
    final_path: Path
    container_format: str  # "JPEG" | "PNG"
    jpeg_quality: Optional[int] = None
    replaces_source: bool = False


@dataclass(frozen=True)
class ProcessResult:
    """Результат обработки одного файла: либо `target`, либо `error`."""
    source: Path
    target: Optional[OutputTarget] = None
    error: Optional[ProcessingError] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchSummary:
    results: List[ProcessResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failures(self) -> List[ProcessResult]:
        return [r for r in self.results if not r.ok]

    @property
    def is_empty(self) -> bool:
        return not self.results
