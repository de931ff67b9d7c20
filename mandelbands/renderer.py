"""Escape-time evaluation, colouring and band rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .geometry import Bounds, Viewport, row_points

DEFAULT_MAX_ITERATIONS = 255
DEFAULT_ESCAPE_RADIUS = 2.0

# Marks points that did not escape within the iteration limit.
NO_ESCAPE = -1

Colorizer = Callable[[np.ndarray], np.ndarray]


@dataclass(frozen=True)
class RenderParameters:
    """Parameters that describe a single render of the Mandelbrot set."""

    bounds: Bounds
    viewport: Viewport
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    escape_radius: float = DEFAULT_ESCAPE_RADIUS
    workers: Optional[int] = None

    @property
    def escape_radius_squared(self) -> float:
        return self.escape_radius * self.escape_radius


def escape_time(point: complex, limit: int, escape_radius_squared: float) -> Optional[int]:
    """Return the iteration at which ``point`` escapes, or None if it never does.

    The magnitude test runs before each step, so a point already outside
    the radius reports 0.
    """

    cr = point.real
    ci = point.imag
    zr = 0.0
    zi = 0.0
    for i in range(limit):
        if zr * zr + zi * zi > escape_radius_squared:
            return i
        zr, zi = zr * zr - zi * zi + cr, 2.0 * zr * zi + ci
    return None


def _escape_step(zr: np.ndarray, zi: np.ndarray, cr: np.ndarray, ci: np.ndarray, active: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Advance the points that are still active by one iteration."""

    zr_new = zr * zr - zi * zi + cr
    zi_new = 2.0 * zr * zi + ci
    return np.where(active, zr_new, zr), np.where(active, zi_new, zi)


def escape_times(re: np.ndarray, im, limit: int, escape_radius_squared: float) -> np.ndarray:
    """Vectorized :func:`escape_time` over arrays of real and imaginary parts.

    Points that never escape are reported as ``NO_ESCAPE``.
    """

    cr = np.asarray(re, dtype=np.float64)
    ci = np.broadcast_to(np.asarray(im, dtype=np.float64), cr.shape)
    zr = np.zeros_like(cr)
    zi = np.zeros_like(cr)
    counts = np.full(cr.shape, NO_ESCAPE, dtype=np.int64)
    active = np.ones(cr.shape, dtype=bool)

    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(limit):
            escaped = active & (zr * zr + zi * zi > escape_radius_squared)
            counts[escaped] = i
            active &= ~escaped
            if not active.any():
                break
            zr, zi = _escape_step(zr, zi, cr, ci, active)
    return counts


def colorize(result: Optional[int]) -> tuple[int, int, int]:
    """Map an escape result to an RGB triple.

    Points that never escape are black. Otherwise ``energy = 255 - count``
    drives the channels: red is the energy, green its product with the
    remaining headroom truncated to a byte, blue their integer quotient
    (0 when there is no headroom left).
    """

    if result is None:
        return 0, 0, 0
    energy = min(max(255 - result, 0), 255)
    headroom = 255 - energy
    green = (energy * headroom) & 0xFF
    blue = energy // headroom if headroom else 0
    return energy, green, blue


def colorize_counts(counts: np.ndarray) -> np.ndarray:
    """Vectorized :func:`colorize`, returning an ``(..., 3)`` array of bytes."""

    counts = np.asarray(counts, dtype=np.int64)
    energy = np.clip(255 - counts, 0, 255)
    headroom = 255 - energy
    green = (energy * headroom) & 0xFF
    blue = np.where(headroom == 0, 0, energy // np.maximum(headroom, 1))
    rgb = np.stack((energy, green, blue), axis=-1)
    rgb[counts == NO_ESCAPE] = 0
    return rgb.astype(np.uint8)


def new_pixel_buffer(bounds: Bounds) -> np.ndarray:
    """Allocate a flat, row-major RGB buffer for ``bounds``."""

    return np.zeros(3 * bounds.pixel_count, dtype=np.uint8)


def render_band(
    band: np.ndarray,
    band_bounds: Bounds,
    upper_left: complex,
    lower_right: complex,
    escape_radius_squared: float,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    colorizer: Optional[Colorizer] = None,
) -> None:
    """Fill ``band`` row by row with the colours of the points it covers."""

    assert band.size == 3 * band_bounds.pixel_count, "band buffer does not match its bounds"
    assert band.flags.c_contiguous, "band buffer must be contiguous"

    colorizer = colorize_counts if colorizer is None else colorizer
    viewport = Viewport(upper_left, lower_right)
    pixels = band.reshape(band_bounds.height, band_bounds.width, 3)
    for row in range(band_bounds.height):
        re, im = row_points(band_bounds, row, viewport)
        counts = escape_times(re, im, max_iterations, escape_radius_squared)
        pixels[row] = colorizer(counts)
