import numpy as np
import pytest

from mandelbands import (
    NO_ESCAPE,
    Bounds,
    Viewport,
    colormap_colorizer,
    load_colormap,
    new_pixel_buffer,
    parse_hex_color,
    render,
)


def test_parse_hex_color():
    assert parse_hex_color("#102030") == (16, 32, 48)
    assert parse_hex_color("ffffff") == (255, 255, 255)


@pytest.mark.parametrize("text", ["#12345", "#gg0000", ""])
def test_parse_hex_color_rejects_malformed(text):
    with pytest.raises(ValueError):
        parse_hex_color(text)


def test_load_colormap_rejects_unknown_names():
    with pytest.raises(ValueError):
        load_colormap("definitely-not-a-colormap")


def test_colormap_colorizer_paints_inside_points():
    colorizer = colormap_colorizer(load_colormap("viridis"), 100, inside=(10, 20, 30))
    rgb = colorizer(np.array([NO_ESCAPE, 0, 50, 99]))

    assert rgb.dtype == np.uint8
    assert rgb.shape == (4, 3)
    assert rgb[0].tolist() == [10, 20, 30]
    assert len({tuple(pixel) for pixel in rgb[1:].tolist()}) == 3


def test_colormap_render_is_deterministic():
    bounds = Bounds(16, 12)
    viewport = Viewport(complex(-2.0, 1.0), complex(1.0, -1.0))
    colorizer = colormap_colorizer(load_colormap("inferno"), 255)

    first = new_pixel_buffer(bounds)
    second = new_pixel_buffer(bounds)
    render(first, bounds, viewport, 4.0, workers=4, colorizer=colorizer)
    render(second, bounds, viewport, 4.0, workers=1, colorizer=colorizer)
    assert np.array_equal(first, second)
