"""Контроллер пакетной обработки: оркестрация сервисов по списку файлов.

SOLID:
- SRP: только порядок обработки, учёт результатов и вывод прогресса.
- DIP: логика изображений инкапсулирована в `ImageService`.
Clean Code:
- Ошибка одного файла не прерывает пакет.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, TextIO

from image_optimizer.models.request import BatchSummary, ProcessingRequest, ProcessResult
from image_optimizer.services.image_service import ImageService

logger = logging.getLogger(__name__)

NO_IMAGES_MESSAGE = "Keine Bilder im angegebenen Ordner gefunden."


@dataclass
class BatchController:
    """Прогоняет файлы через конвейер последовательно, в порядке поиска.

    Ответственности:
    - Вызов `ImageService.process_image` для каждого файла.
    - Вывод строки прогресса в stdout и ошибки в лог (stderr).
    - Итоговая сводка `<успешно> von <всего>`.
    """
    request: ProcessingRequest
    out: TextIO = field(default_factory=lambda: sys.stdout)

    _image_service: ImageService = field(default_factory=ImageService)

    def run(self, files: Iterable[Path]) -> BatchSummary:
        summary = BatchSummary()
        for file in files:
            result = self._image_service.process_image(file, self.request)
            summary.results.append(result)
            self._report(result)
        self._report_summary(summary)
        return summary

    # ---- Helpers ----
    def _report(self, result: ProcessResult) -> None:
        if not result.ok:
            logger.error("Fehler beim Verarbeiten von %s: %s", result.source, result.error)
            return
        if self.request.overwrite_in_place:
            print(f"✓ Überschrieben: {result.source}", file=self.out)
        else:
            print(f"✓ Optimiert: {result.source.name}", file=self.out)

    def _report_summary(self, summary: BatchSummary) -> None:
        if summary.is_empty:
            print(NO_IMAGES_MESSAGE, file=self.out)
            return
        print(
            f"\nFertig! {summary.success_count} von {summary.total} Bildern erfolgreich optimiert.",
            file=self.out,
        )
