"""Public API for banded Mandelbrot rendering."""

from .geometry import Bounds, Viewport, pixel_to_point, row_points
from .renderer import (
    DEFAULT_ESCAPE_RADIUS,
    DEFAULT_MAX_ITERATIONS,
    NO_ESCAPE,
    RenderParameters,
    colorize,
    colorize_counts,
    escape_time,
    escape_times,
    new_pixel_buffer,
    render_band,
)
from .dispatcher import band_viewport, default_workers, render
from .encoder import format_from_path, is_supported_format, to_image, write_image
from .palette import colormap_colorizer, load_colormap, parse_hex_color

__all__ = [
    "Bounds",
    "DEFAULT_ESCAPE_RADIUS",
    "DEFAULT_MAX_ITERATIONS",
    "NO_ESCAPE",
    "RenderParameters",
    "Viewport",
    "band_viewport",
    "colorize",
    "colorize_counts",
    "colormap_colorizer",
    "default_workers",
    "escape_time",
    "escape_times",
    "format_from_path",
    "is_supported_format",
    "load_colormap",
    "new_pixel_buffer",
    "parse_hex_color",
    "pixel_to_point",
    "render",
    "render_band",
    "row_points",
    "to_image",
    "write_image",
]
