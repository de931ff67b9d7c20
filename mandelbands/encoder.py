"""Image file output for rendered pixel buffers."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import PIL.Image

from .geometry import Bounds


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def format_from_path(path: Path, default: str = "png") -> str:
    """Image format implied by the extension of ``path``."""

    suffix = Path(path).suffix.lower().lstrip(".")
    return suffix or default


def is_supported_format(image_format: str) -> bool:
    """Whether Pillow can save images in ``image_format`` (e.g. "png", "jpg")."""

    PIL.Image.init()
    return _pil_format_name(image_format) in PIL.Image.SAVE


def to_image(buffer: np.ndarray, bounds: Bounds) -> PIL.Image.Image:
    """Wrap a flat row-major RGB buffer as a Pillow image."""

    if buffer.size != 3 * bounds.pixel_count:
        raise ValueError(
            f"buffer holds {buffer.size} bytes, expected {3 * bounds.pixel_count} for {bounds.width}x{bounds.height}"
        )
    pixels = np.ascontiguousarray(buffer, dtype=np.uint8).reshape(bounds.height, bounds.width, 3)
    return PIL.Image.fromarray(pixels)


def write_image(path, buffer: np.ndarray, bounds: Bounds, image_format: str = "png") -> None:
    """Write ``buffer`` to ``path`` as an 8-bit RGB image."""

    image = to_image(buffer, bounds)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=_pil_format_name(image_format))
