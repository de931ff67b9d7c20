"""Colormap-based colouring of escape counts."""

from __future__ import annotations

import numpy as np

from .renderer import NO_ESCAPE, Colorizer

try:
    from matplotlib import colormaps as _mpl_colormaps
except ImportError:  # Matplotlib < 3.5
    from matplotlib import cm as _mpl_colormaps  # type: ignore


def load_colormap(name: str):
    return _mpl_colormaps.get_cmap(name)


def parse_hex_color(hex_color: str) -> tuple[int, int, int]:
    """Parse ``#RRGGBB`` into a byte triple."""

    hex_color = hex_color.lstrip('#')
    if len(hex_color) != 6:
        raise ValueError('colour must be in the form #RRGGBB.')
    try:
        return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        raise ValueError('colour must contain only hexadecimal digits.') from exc


def colormap_colorizer(cmap, max_iterations: int, inside: tuple[int, int, int] = (0, 0, 0)) -> Colorizer:
    """Build a colorizer that samples ``cmap`` by how slowly each point escaped.

    Points escaping on the last allowed iteration land at the low end of the
    colormap, immediate escapes at the high end.
    """

    inside_rgb = np.asarray(inside, dtype=np.uint8)
    scale = np.float64(max(max_iterations, 1))

    def colorize(counts: np.ndarray) -> np.ndarray:
        counts = np.asarray(counts, dtype=np.int64)
        position = np.clip(1.0 - counts / scale, 0.0, 1.0)
        rgba = np.asarray(cmap(position))
        rgb = np.uint8(np.clip(rgba[..., :3] * 255, 0, 255))
        rgb[counts == NO_ESCAPE] = inside_rgb
        return rgb

    return colorize
