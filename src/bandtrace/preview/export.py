"""Image export utilities.

Supported formats:
    - PNG (8-bit sRGB via Pillow)

Example:
    >>> from bandtrace.preview.export import save_png
    >>> frame_buffer = renderer.draw()
    >>> save_png(frame_buffer, "output.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from bandtrace.preview.display import linear_to_display_bytes

if TYPE_CHECKING:
    from bandtrace.preview.framebuffer import FrameBuffer


def save_png(frame_buffer: FrameBuffer, filepath: str | Path) -> Path:
    """Save a frame buffer as a PNG file.

    The frame buffer already holds sRGB bytes, so they are written as-is.

    Args:
        frame_buffer: The FrameBuffer to save.
        filepath: Output file path (should end in .png).

    Returns:
        The path the image was written to.
    """
    return save_png_from_array(frame_buffer.pixels, filepath)


def save_png_from_array(image: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an 8-bit RGB array of shape (H, W, 3) as a PNG file."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
    pil_image.save(filepath)
    return filepath


def image_to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a linear float image of shape (H, W, 3) to 8-bit sRGB.

    Used to export a single band or any other linear image without going
    through a FrameBuffer.
    """
    return linear_to_display_bytes(image)
