"""Colour conversion and Matplotlib-based preview display.

Workers produce linear-space colours. Before they reach the 8-bit frame
buffer every channel goes through the sRGB transfer function

    srgb(c) = 12.92 * c                    if c <= 0.0031308
            = 1.055 * c ** (1 / 2.4) - 0.055 otherwise

and is scaled by 255, rounded to the nearest integer and clamped to
[0, 255]. NaN channels become 0.

Example:
    >>> import numpy as np
    >>> from bandtrace.preview.display import linear_to_display_bytes
    >>> linear_to_display_bytes(np.array([[[0.0, 0.5, 1.0]]], dtype=np.float32))
    array([[[  0, 188, 255]]], dtype=uint8)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from bandtrace.preview.framebuffer import FrameBuffer


# Linear values at or below this use the linear segment of the sRGB curve
SRGB_LINEAR_THRESHOLD = 0.0031308


def linear_value_to_srgb(value: float) -> float:
    """Convert one linear channel value to sRGB (not scaled to bytes)."""
    if value <= SRGB_LINEAR_THRESHOLD:
        return value * 12.92
    return 1.055 * value ** (1.0 / 2.4) - 0.055


def linear_to_srgb(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float32]:
    """Apply the sRGB transfer function to every channel of an image.

    Args:
        image: Linear image array of any shape.

    Returns:
        sRGB values with the same shape, in [0, 1] for inputs in [0, 1].
    """
    image = np.asarray(image, dtype=np.float32)
    # Negative values only reach the linear branch; the clamp keeps the power
    # branch from producing NaN for them.
    curved = 1.055 * np.power(np.maximum(image, SRGB_LINEAR_THRESHOLD), 1.0 / 2.4) - 0.055
    result = np.where(image <= SRGB_LINEAR_THRESHOLD, image * 12.92, curved)
    return result.astype(np.float32)


def linear_to_display_bytes(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a linear image to 8-bit sRGB.

    Args:
        image: Linear image array of shape (H, W, 3).

    Returns:
        uint8 array of shape (H, W, 3).
    """
    scaled = linear_to_srgb(image) * 255.0
    scaled = np.nan_to_num(scaled, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)


def show_preview(
    frame_buffer: FrameBuffer,
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4.5),
    block: bool = True,
) -> None:
    """Display a frame buffer as a Matplotlib figure.

    The title shows the frame buffer's progress and elapsed-time texts unless
    a custom title is given.

    Args:
        frame_buffer: The FrameBuffer to display.
        title: Custom title.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(frame_buffer.pixels)
    ax.axis("off")

    if title is None:
        title = f"{frame_buffer.progress_text}  {frame_buffer.elapsed_time_text}".strip()
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
