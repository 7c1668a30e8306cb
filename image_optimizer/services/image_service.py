"""Загрузка, кодирование и полный конвейер обработки одного файла.

Принципы:
- SRP: класс отвечает за ввод-вывод изображения; пиксельные операции в `ProcessService`.
- Ошибки отдельного файла возвращаются в `ProcessResult`, пакет не прерывается.
- Запись атомарная: временный файл в каталоге назначения + `os.replace`.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from image_optimizer.errors import DecodeError, EncodeError, ProcessingError
from image_optimizer.models.image_model import ImageData
from image_optimizer.models.request import OutputTarget, ProcessingRequest, ProcessResult
from image_optimizer.services.output_service import resolve_output_target
from image_optimizer.services.process_service import ProcessService

logger = logging.getLogger(__name__)


def _has_transparency(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


class ImageService:
    def __init__(self, process_service: Optional[ProcessService] = None) -> None:
        self._process_service = process_service or ProcessService()

    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` в режиме RGBA (если есть прозрачность) или RGB.

        Raises:
            DecodeError: если файла нет или он не распознан/повреждён.
        """
        path = Path(file_path)
        if not path.is_file():
            raise DecodeError(f"Fehler beim Öffnen: Datei nicht gefunden: {path}", path)

        try:
            with Image.open(path) as src:
                mode = "RGBA" if _has_transparency(src) else "RGB"
                pil_image = src.convert(mode)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            raise DecodeError(f"Fehler beim Öffnen: {exc}", path) from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=size_bytes,
        )

    def save_image(self, image: Image.Image, target: OutputTarget, source: Optional[Path] = None) -> Path:
        """Кодирует изображение в формат `target` и атомарно записывает его.

        Если `target.replaces_source`, исходный файл удаляется после записи.
        Уже существующий другой файл по новому пути не перезаписывается.

        Raises:
            EncodeError: ошибка кодировщика или файловой системы.
        """
        final_path = target.final_path
        same_as_source = source is not None and source.exists() and final_path.exists() and source.samefile(final_path)
        if target.replaces_source and final_path.exists() and not same_as_source:
            # соседний файл с тем же именем не затирается
            raise EncodeError(f"Zieldatei existiert bereits: {final_path}", final_path)

        if target.container_format == "JPEG":
            # JPEG без альфа-канала
            if image.mode not in ("RGB", "L"):
                image = image.convert("L" if image.mode == "LA" else "RGB")
            params = {"quality": target.jpeg_quality}
        else:
            params = {}

        tmp_path = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=".tmp-", suffix=final_path.suffix, dir=final_path.parent)
            os.close(fd)
            tmp_path = Path(tmp_name)
            image.save(tmp_path, format=target.container_format, **params)
            os.replace(tmp_path, final_path)
            tmp_path = None
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Fehler beim Speichern: {exc}", final_path) from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        if target.replaces_source and source is not None and source.exists() and not source.samefile(final_path):
            try:
                source.unlink()
            except OSError as exc:
                raise EncodeError(f"Fehler beim Entfernen der Quelldatei: {exc}", source) from exc
        return final_path

    def process_image(self, source_file: str | Path, request: ProcessingRequest) -> ProcessResult:
        """Конвейер одного файла: декодирование -> цвет -> размер -> кодирование.

        Никогда не бросает `ProcessingError`: ошибка возвращается в результате.
        """
        source = Path(source_file)
        decoded: Optional[Image.Image] = None
        image: Optional[Image.Image] = None
        try:
            data = self.load_image(source)
            decoded = image = data.pil_image
            logger.debug("Decoded %s (%sx%s, %s)", source, data.width, data.height, data.mode)

            image = self._process_service.apply_color_transform(image, request.profile)
            image = self._process_service.resize_to_fit(image, request.target_dimension, request.profile)

            target = resolve_output_target(source, request)
            self.save_image(image, target, source)
            logger.debug("Wrote %s as %s", target.final_path, target.container_format)
            return ProcessResult(source=source, target=target, width=image.width, height=image.height)
        except ProcessingError as exc:
            if exc.path is None:
                exc.path = source
            return ProcessResult(source=source, error=exc)
        finally:
            if image is not None and image is not decoded:
                image.close()
            if decoded is not None:
                decoded.close()
