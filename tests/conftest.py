from __future__ import annotations

from pathlib import Path
from typing import Callable, Tuple

import pytest
from PIL import Image

RED = (255, 0, 0)


@pytest.fixture
def make_image(tmp_path: Path) -> Callable[..., Path]:
    """Фабрика тестовых изображений одного цвета."""

    def _make(
        name: str = "test.png",
        size: Tuple[int, int] = (10, 10),
        color: tuple = RED,
        mode: str = "RGB",
        directory: Path | None = None,
    ) -> Path:
        path = (directory or tmp_path) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new(mode, size, color).save(path)
        return path

    return _make
