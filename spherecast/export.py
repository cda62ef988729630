"""
Writing the rendered byte buffer to disk.

Both writers copy the buffer out under its lock first, so they can run while
a render is still in progress and will save whatever pixels are committed.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

from PIL import Image as PILImage

from .signals import PixelBuffer


class ExportError(Exception):
    """Raised when there is no image to export."""


def _snapshot(buffer: PixelBuffer) -> tuple[int, int, bytes]:
    width, height, data = buffer.snapshot()
    if not data:
        raise ExportError("No image to export")
    return width, height, data


def write_ppm(buffer: PixelBuffer, filename: Union[str, Path]) -> Path:
    """Save the buffer as a plain-text (P3) PPM image.

    Args:
        buffer: The pixel buffer to save
        filename: Output path

    Returns:
        The path written
    """
    width, height, data = _snapshot(buffer)
    path = Path(filename)

    lines = [f"P3\n{width} {height}\n255\n"]
    for idx in range(0, len(data), 3):
        lines.append(f"{data[idx]} {data[idx + 1]} {data[idx + 2]}\n")

    path.write_text(''.join(lines))
    return path


def save_png(buffer: PixelBuffer, filename: Union[str, Path]) -> Path:
    """Save the buffer through Pillow; the extension picks the format."""
    width, height, data = _snapshot(buffer)
    path = Path(filename)
    PILImage.frombytes('RGB', (width, height), data).save(path)
    return path


def save_image(buffer: PixelBuffer, filename: Union[str, Path]) -> Path:
    """Save as PPM for .ppm names, otherwise through Pillow."""
    if str(filename).lower().endswith('.ppm'):
        return write_ppm(buffer, filename)
    return save_png(buffer, filename)
