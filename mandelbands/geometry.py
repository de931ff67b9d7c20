"""Mapping between the pixel grid and the complex plane."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Bounds:
    """Dimensions of a pixel grid."""

    width: int
    height: int

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane given by its upper-left and lower-right corners."""

    upper_left: complex
    lower_right: complex

    @property
    def plane_width(self) -> float:
        return self.lower_right.real - self.upper_left.real

    @property
    def plane_height(self) -> float:
        return self.upper_left.imag - self.lower_right.imag


def pixel_to_point(bounds: Bounds, pixel: tuple[int, int], viewport: Viewport) -> complex:
    """Return the point of the plane under ``pixel`` (column, row).

    Rows grow downwards while the imaginary axis grows upwards, hence the
    subtraction on the imaginary part.
    """

    column, row = pixel
    upper_left = viewport.upper_left
    re = upper_left.real + column * viewport.plane_width / bounds.width
    im = upper_left.imag - row * viewport.plane_height / bounds.height
    return complex(re, im)


def row_points(bounds: Bounds, row: int, viewport: Viewport) -> tuple[np.ndarray, float]:
    """Real parts of every column in ``row`` and the row's imaginary part.

    Uses the same operation order as :func:`pixel_to_point` so both agree
    exactly.
    """

    columns = np.arange(bounds.width, dtype=np.float64)
    re = np.float64(viewport.upper_left.real) + columns * np.float64(viewport.plane_width) / np.float64(bounds.width)
    im = viewport.upper_left.imag - row * viewport.plane_height / bounds.height
    return re, im
