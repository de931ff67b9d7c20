"""Split a frame into one-row bands and render them on a thread pool."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np

from .geometry import Bounds, Viewport, pixel_to_point
from .renderer import DEFAULT_MAX_ITERATIONS, Colorizer, render_band


def default_workers() -> int:
    """Number of threads used when the caller does not choose one."""

    return os.cpu_count() or 1


def band_viewport(bounds: Bounds, top: int, viewport: Viewport) -> Viewport:
    """Corners of the slice of ``viewport`` covered by pixel row ``top``."""

    return Viewport(
        upper_left=pixel_to_point(bounds, (0, top), viewport),
        lower_right=pixel_to_point(bounds, (bounds.width, top + 1), viewport),
    )


def render(
    buffer: np.ndarray,
    bounds: Bounds,
    viewport: Viewport,
    escape_radius_squared: float,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    workers: Optional[int] = None,
    colorizer: Optional[Colorizer] = None,
) -> None:
    """Render the whole frame into ``buffer``, one band per pixel row.

    Every band writes to its own slice of ``buffer`` and only reads the
    immutable arguments, so the result does not depend on the order in
    which bands run. Returns once all bands are done; the first band that
    failed re-raises its exception here.
    """

    assert buffer.size == 3 * bounds.pixel_count, "pixel buffer does not match its bounds"

    row_stride = 3 * bounds.width
    band_bounds = Bounds(bounds.width, 1)

    def render_row(top: int) -> None:
        corners = band_viewport(bounds, top, viewport)
        band = buffer[top * row_stride:(top + 1) * row_stride]
        render_band(
            band,
            band_bounds,
            corners.upper_left,
            corners.lower_right,
            escape_radius_squared,
            max_iterations=max_iterations,
            colorizer=colorizer,
        )

    workers = default_workers() if workers is None else workers
    if workers <= 1:
        for top in range(bounds.height):
            render_row(top)
        return

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(render_row, top) for top in range(bounds.height)]
    for future in futures:
        future.result()
