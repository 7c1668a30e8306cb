"""Профили оптимизации.

Каждая политика (цветовое преобразование, размер по умолчанию, фильтр
ресэмплинга, качество JPEG, принудительный PNG) задана полной таблицей по
перечислению, без сравнения строк в конвейере.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from PIL import Image

from image_optimizer.errors import ValidationError


class ColorTransform(Enum):
    NONE = "none"
    GRAYSCALE = "grayscale"
    SEPIA = "sepia"
    INVERT = "invert"


class OptimizationProfile(str, Enum):
    WEB = "web"
    APP = "app"
    BW = "bw"
    THUMBNAIL = "thumbnail"
    SEPIA = "sepia"
    INVERT = "invert"

    @classmethod
    def parse(cls, name: Optional[str]) -> "OptimizationProfile":
        """Возвращает профиль по имени из командной строки.

        Raises:
            ValidationError: если имя не входит в список профилей.
        """
        try:
            return cls(name)
        except ValueError as exc:
            raise ValidationError(
                "--type muss 'web', 'app', 'bw', 'thumbnail', 'sepia' oder 'invert' sein"
            ) from exc

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(p.value for p in cls)

    @property
    def color_transform(self) -> ColorTransform:
        return _COLOR_TRANSFORMS[self]

    @property
    def default_target(self) -> int:
        """Размер по умолчанию при `--size 0` (0 = без изменения размера)."""
        return _DEFAULT_TARGETS[self]

    @property
    def resample(self) -> Image.Resampling:
        return _RESAMPLING[self]

    @property
    def jpeg_quality(self) -> int:
        return _JPEG_QUALITY[self]

    @property
    def forces_png(self) -> bool:
        return self is OptimizationProfile.APP


_COLOR_TRANSFORMS = {
    OptimizationProfile.WEB: ColorTransform.NONE,
    OptimizationProfile.APP: ColorTransform.NONE,
    OptimizationProfile.BW: ColorTransform.GRAYSCALE,
    OptimizationProfile.THUMBNAIL: ColorTransform.NONE,
    OptimizationProfile.SEPIA: ColorTransform.SEPIA,
    OptimizationProfile.INVERT: ColorTransform.INVERT,
}

THUMBNAIL_DEFAULT_SIZE = 300

_DEFAULT_TARGETS = {
    OptimizationProfile.WEB: 0,
    OptimizationProfile.APP: 0,
    OptimizationProfile.BW: 0,
    OptimizationProfile.THUMBNAIL: THUMBNAIL_DEFAULT_SIZE,
    OptimizationProfile.SEPIA: 0,
    OptimizationProfile.INVERT: 0,
}

# app: кубический фильтр, остальные: Ланцош
_RESAMPLING = {
    OptimizationProfile.WEB: Image.Resampling.LANCZOS,
    OptimizationProfile.APP: Image.Resampling.BICUBIC,
    OptimizationProfile.BW: Image.Resampling.LANCZOS,
    OptimizationProfile.THUMBNAIL: Image.Resampling.LANCZOS,
    OptimizationProfile.SEPIA: Image.Resampling.LANCZOS,
    OptimizationProfile.INVERT: Image.Resampling.LANCZOS,
}

_JPEG_QUALITY = {
    OptimizationProfile.WEB: 85,
    OptimizationProfile.APP: 85,
    OptimizationProfile.BW: 85,
    OptimizationProfile.THUMBNAIL: 75,
    OptimizationProfile.SEPIA: 85,
    OptimizationProfile.INVERT: 85,
}
