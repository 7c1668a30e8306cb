from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
from PIL import Image

from image_optimizer.models.profile import ColorTransform, OptimizationProfile

logger = logging.getLogger(__name__)

# Строки: r', g', b' как линейные комбинации (r, g, b)
SEPIA_MATRIX = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float32,
)


class ProcessService:
    # ---------- Цветовые преобразования ----------
    def to_grayscale(self, image: Image.Image) -> Image.Image:
        """
        Преобразование в оттенки серого (ITU-R 601-2), альфа-канал сохраняется.
        """
        if image.mode in ("L", "LA"):
            return image.copy()
        if image.mode == "RGBA":
            return image.convert("LA")
        return image.convert("L")

    def to_sepia(self, image: Image.Image) -> Image.Image:
        """
        Сепия по 8-битным каналам, значения ограничены [0, 255], альфа без изменений.
        """
        arr = self._image_to_rgb_np(image)
        rgb = arr[..., :3] @ SEPIA_MATRIX.T
        arr[..., :3] = np.clip(np.rint(rgb), 0, 255)
        return self._np_to_image(arr)

    def invert(self, image: Image.Image) -> Image.Image:
        """
        Инверсия цветовых каналов: c' = 255 - c, альфа без изменений.
        """
        arr = self._image_to_rgb_np(image)
        arr[..., :3] = 255.0 - arr[..., :3]
        return self._np_to_image(arr)

    def apply_color_transform(self, image: Image.Image, profile: OptimizationProfile) -> Image.Image:
        transform = profile.color_transform
        if transform is ColorTransform.GRAYSCALE:
            return self.to_grayscale(image)
        if transform is ColorTransform.SEPIA:
            return self.to_sepia(image)
        if transform is ColorTransform.INVERT:
            return self.invert(image)
        return image

    # ---------- Изменение размера ----------
    def fit_size(self, width: int, height: int, target: int) -> Tuple[int, int]:
        """
        Размер после вписывания в квадрат target x target с сохранением пропорций.
        Увеличение не выполняется: если обе стороны <= target, размер не меняется.
        """
        if target <= 0 or (width <= target and height <= target):
            return width, height
        if width >= height:
            new_w = target
            new_h = int(height * target / width + 0.5)
        else:
            new_h = target
            new_w = int(width * target / height + 0.5)
        return max(1, new_w), max(1, new_h)

    def resize_to_fit(self, image: Image.Image, target: int, profile: OptimizationProfile) -> Image.Image:
        size = self.fit_size(image.width, image.height, target)
        if size == image.size:
            return image
        logger.debug("Resize %sx%s -> %sx%s (%s)", image.width, image.height, size[0], size[1], profile.resample.name)
        return image.resize(size, profile.resample)

    # ---------- Вспомогательные функции ----------
    def _image_to_rgb_np(self, image: Image.Image) -> np.ndarray:
        """
        Возвращает float32-массив HxWx3 (или HxWx4 при наличии альфы) в диапазоне [0, 255].
        """
        if image.mode not in ("RGB", "RGBA"):
            image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
        return np.asarray(image, dtype=np.float32).copy()

    def _np_to_image(self, arr: np.ndarray) -> Image.Image:
        out = np.clip(arr, 0, 255).astype(np.uint8)
        return Image.fromarray(out)
