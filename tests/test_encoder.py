import numpy as np
import PIL.Image
import pytest

from mandelbands import Bounds, format_from_path, is_supported_format, to_image, write_image


def _gradient(bounds):
    return np.arange(3 * bounds.pixel_count, dtype=np.uint64).astype(np.uint8)


def test_write_image_round_trips_pixels(tmp_path):
    bounds = Bounds(5, 3)
    buffer = _gradient(bounds)
    path = tmp_path / "nested" / "out.png"

    write_image(path, buffer, bounds)

    with PIL.Image.open(path) as image:
        assert image.format == "PNG"
        assert image.mode == "RGB"
        assert image.size == (5, 3)
        pixels = np.asarray(image)
    assert np.array_equal(pixels.reshape(-1), buffer)


def test_top_row_comes_first():
    bounds = Bounds(2, 2)
    buffer = np.zeros(12, dtype=np.uint8)
    buffer[:3] = (255, 0, 0)
    image = to_image(buffer, bounds)
    assert image.getpixel((0, 0)) == (255, 0, 0)
    assert image.getpixel((0, 1)) == (0, 0, 0)


def test_write_image_rejects_mismatched_buffer(tmp_path):
    with pytest.raises(ValueError):
        write_image(tmp_path / "bad.png", np.zeros(7, dtype=np.uint8), Bounds(2, 2))
    assert not (tmp_path / "bad.png").exists()


def test_write_image_uses_requested_format(tmp_path):
    bounds = Bounds(4, 4)
    path = tmp_path / "out.jpg"
    write_image(path, _gradient(bounds), bounds, "jpg")
    with PIL.Image.open(path) as image:
        assert image.format == "JPEG"


def test_write_image_propagates_io_errors(tmp_path):
    blocker = tmp_path / "file.txt"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        write_image(blocker / "out.png", np.zeros(3, dtype=np.uint8), Bounds(1, 1))


@pytest.mark.parametrize("name, expected", [
    ("mandel.png", "png"),
    ("MANDEL.TIF", "tif"),
    ("mandel", "png"),
])
def test_format_from_path(name, expected):
    assert format_from_path(name) == expected


@pytest.mark.parametrize("image_format, expected", [
    ("png", True),
    ("jpg", True),
    ("tif", True),
    ("bogus", False),
])
def test_is_supported_format(image_format, expected):
    assert is_supported_format(image_format) is expected
