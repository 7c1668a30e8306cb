from pathlib import Path

import pytest

from image_optimizer.errors import PathNotFound, TraversalError, UnsupportedFormat
from image_optimizer.services.input_service import find_image_files, is_image_file, resolve_inputs


@pytest.mark.parametrize(
    "path, expected",
    [
        ("test.jpg", True),
        ("test.JPG", True),
        ("test.JpG", True),
        ("test.jpeg", True),
        ("test.png", True),
        ("test.gif", True),
        ("test.bmp", True),
        ("test.webp", True),
        ("/path/to/image.PNG", True),
        ("test.txt", False),
        ("test", False),
        ("test.pdf", False),
        ("", False),
        ("archive.jpg.zip", False),
    ],
)
def test_is_image_file(path, expected):
    assert is_image_file(path) is expected


def test_find_image_files_recurses_and_filters(tmp_path: Path):
    names = ["image1.jpg", "image2.png", "document.txt", "image3.JPEG", "image4.gif", "readme.md", "image5.bmp", "image6.webp"]
    for name in names:
        (tmp_path / name).write_bytes(b"fake")
    sub = tmp_path / "subdir" / "deeper"
    sub.mkdir(parents=True)
    (sub / "subimage.jpg").write_bytes(b"fake")

    found = find_image_files(tmp_path)

    expected = {tmp_path / n for n in names if is_image_file(n)} | {sub / "subimage.jpg"}
    assert set(found) == expected
    assert len(found) == len(expected)


def test_find_image_files_is_stable(tmp_path: Path):
    for name in ("b.png", "a.png", "c.jpg"):
        (tmp_path / name).write_bytes(b"fake")
    assert find_image_files(tmp_path) == find_image_files(tmp_path)
    assert [p.name for p in find_image_files(tmp_path)] == ["a.png", "b.png", "c.jpg"]


def test_find_image_files_empty_dir(tmp_path: Path):
    assert find_image_files(tmp_path) == []


def test_find_image_files_nonexistent_dir(tmp_path: Path):
    with pytest.raises(TraversalError):
        find_image_files(tmp_path / "does" / "not" / "exist")


def test_resolve_inputs_single_file(make_image):
    path = make_image("photo.png")
    assert resolve_inputs(path) == [path]


def test_resolve_inputs_unsupported_file(tmp_path: Path):
    path = tmp_path / "notes.txt"
    path.write_text("hello")
    with pytest.raises(UnsupportedFormat):
        resolve_inputs(path)


def test_resolve_inputs_missing_path(tmp_path: Path):
    with pytest.raises(PathNotFound):
        resolve_inputs(tmp_path / "missing.png")
