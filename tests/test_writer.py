from pathlib import Path

import numpy as np
import PIL.Image
import pytest

from mandelbrot import Bounds, ImageWriteFailure, write_image
from mandelbrot.writer import resolve_format, to_image


def _gradient(bounds: Bounds) -> np.ndarray:
    return (np.arange(bounds.pixels) % 256).astype(np.uint8)


def test_write_png_round_trips_pixels(tmp_path: Path) -> None:
    bounds = Bounds(16, 9)
    buffer = _gradient(bounds)
    path = write_image(tmp_path / "out.png", buffer, bounds)
    with PIL.Image.open(path) as image:
        assert image.format == "PNG"
        assert image.mode == "L"
        assert image.size == (16, 9)
        assert image.tobytes() == buffer.tobytes()


def test_write_is_row_major(tmp_path: Path) -> None:
    bounds = Bounds(3, 2)
    buffer = np.array([1, 2, 3, 4, 5, 6], dtype=np.uint8)
    path = write_image(tmp_path / "small.png", buffer, bounds)
    with PIL.Image.open(path) as image:
        assert image.getpixel((2, 0)) == 3
        assert image.getpixel((0, 1)) == 4


def test_write_creates_parent_directories(tmp_path: Path) -> None:
    bounds = Bounds(4, 4)
    path = write_image(tmp_path / "nested" / "dir" / "out.png", _gradient(bounds), bounds)
    assert path.is_file()


def test_write_explicit_format(tmp_path: Path) -> None:
    bounds = Bounds(8, 8)
    path = write_image(tmp_path / "picture", _gradient(bounds), bounds, "jpg")
    with PIL.Image.open(path) as image:
        assert image.format == "JPEG"


def test_write_without_suffix_defaults_to_png(tmp_path: Path) -> None:
    bounds = Bounds(2, 2)
    path = write_image(tmp_path / "picture", _gradient(bounds), bounds)
    with PIL.Image.open(path) as image:
        assert image.format == "PNG"


def test_resolve_format() -> None:
    assert resolve_format(Path("a.png")) == "PNG"
    assert resolve_format(Path("a.JPG")) == "JPEG"
    assert resolve_format(Path("a.tif")) == "TIFF"
    assert resolve_format(Path("a"), "gif") == "GIF"
    assert resolve_format(Path("a.png"), ".bmp") == "BMP"


def test_to_image_rejects_wrong_size() -> None:
    with pytest.raises(ImageWriteFailure, match="needs 12"):
        to_image(np.zeros(10, dtype=np.uint8), Bounds(4, 3))


def test_write_unknown_format(tmp_path: Path) -> None:
    bounds = Bounds(2, 2)
    with pytest.raises(ImageWriteFailure, match="could not write image"):
        write_image(tmp_path / "out.png", _gradient(bounds), bounds, "nosuchformat")


def test_write_to_directory_fails(tmp_path: Path) -> None:
    bounds = Bounds(2, 2)
    with pytest.raises(ImageWriteFailure) as excinfo:
        write_image(tmp_path, _gradient(bounds), bounds, "png")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_unknown_format_leaves_no_directories(tmp_path: Path) -> None:
    bounds = Bounds(2, 2)
    with pytest.raises(ImageWriteFailure, match="unknown format"):
        write_image(tmp_path / "fresh" / "nested" / "out.png", _gradient(bounds), bounds, "nosuchformat")
    assert not (tmp_path / "fresh").exists()


def test_failed_save_removes_created_directories(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(self, fp, format=None, **params):
        raise OSError("disk full")

    monkeypatch.setattr(PIL.Image.Image, "save", fail)
    (tmp_path / "existing").mkdir()
    bounds = Bounds(2, 2)
    with pytest.raises(ImageWriteFailure, match="disk full"):
        write_image(tmp_path / "existing" / "fresh" / "out.png", _gradient(bounds), bounds)
    assert (tmp_path / "existing").is_dir()
    assert not (tmp_path / "existing" / "fresh").exists()
