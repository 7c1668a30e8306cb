from pathlib import Path

import pytest
from PIL import Image

from image_optimizer.main import build_parser, main


def test_missing_path_exits_1(caplog):
    assert main([]) == 1
    assert "--path ist erforderlich" in caplog.text


def test_invalid_type_exits_1(make_image):
    assert main(["--path", str(make_image()), "--type", "poster"]) == 1


def test_negative_size_exits_1(make_image):
    assert main(["--path", str(make_image()), "--size", "-5"]) == 1


def test_non_integer_size_exits_1(make_image):
    assert main(["--path", str(make_image()), "--size", "big"]) == 1


def test_path_not_found_exits_1(tmp_path: Path, caplog):
    assert main(["--path", str(tmp_path / "nope")]) == 1
    assert "Pfad nicht gefunden" in caplog.text


def test_unsupported_single_file_exits_1(tmp_path: Path):
    path = tmp_path / "a.txt"
    path.write_text("x")
    assert main(["--path", str(path)]) == 1
    assert not (tmp_path / "optimized").exists()


def test_output_dir_failure_exits_1(make_image, tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    assert main(["--path", str(make_image()), "--output", str(blocker / "out")]) == 1


@pytest.mark.parametrize(
    "argv, expected",
    [
        ([], False),
        (["--overwrite"], True),
        (["--overwrite=true"], True),
        (["--overwrite=false"], False),
        (["--overwrite", "0"], False),
    ],
)
def test_overwrite_flag_parsing(argv, expected):
    args = build_parser().parse_args(["--path", "x", *argv])
    assert args.overwrite is expected


def test_directory_run(make_image, tmp_path: Path, capsys):
    src_dir = tmp_path / "pics"
    make_image("a.png", directory=src_dir)
    make_image("b.jpg", size=(800, 400), directory=src_dir / "nested")
    (src_dir / "notes.txt").write_text("skip me")

    assert main(["--path", str(src_dir), "--size", "200"]) == 0

    out = capsys.readouterr().out
    assert "Fertig! 2 von 2 Bildern erfolgreich optimiert." in out
    assert (src_dir / "optimized" / "a.png").exists()
    with Image.open(src_dir / "optimized" / "b.jpg") as img:
        assert img.size == (200, 100)


def test_empty_directory_exits_0(tmp_path: Path, capsys):
    assert main(["--path", str(tmp_path)]) == 0
    assert "Keine Bilder" in capsys.readouterr().out
    assert not (tmp_path / "optimized").exists()


def test_partial_failure_exits_0(tmp_path: Path, capsys):
    (tmp_path / "broken.png").write_bytes(b"not a png")
    assert main(["--path", str(tmp_path)]) == 0
    assert "Fertig! 0 von 1 Bildern erfolgreich optimiert." in capsys.readouterr().out


def test_overwrite_run_writes_source(make_image, tmp_path: Path):
    src = make_image("a.png", size=(40, 40))
    assert main(["--path", str(src), "--overwrite", "--size", "20", "--output", str(tmp_path / "ignored")]) == 0
    with Image.open(src) as img:
        assert img.size == (20, 20)
    assert not (tmp_path / "optimized").exists()
    assert not (tmp_path / "ignored").exists()


def test_explicit_output_dir(make_image, tmp_path: Path):
    src = make_image("a.gif")
    out = tmp_path / "export"
    assert main(["--path", str(src), "--type", "app", "--output", str(out)]) == 0
    assert (out / "a.png").exists()
