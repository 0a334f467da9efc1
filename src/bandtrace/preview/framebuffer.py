"""Frame buffer: the pixel sink of the Renderer.

The FrameBuffer holds the displayable 8-bit image together with the two
status texts the Renderer keeps up to date:

    "Progress: 0.33333"
    "Time since start in milliseconds: 1520"

Any object providing the PixelSink methods can take its place.

Example:
    >>> from bandtrace.preview.framebuffer import FrameBuffer
    >>> frame_buffer = FrameBuffer(4, 2)
    >>> frame_buffer.set_pixel(1, 0, (255, 128, 0))
    >>> frame_buffer.get_pixel(1, 0)
    (255, 128, 0)
    >>> frame_buffer.update_progress(1 / 3)
    >>> frame_buffer.progress_text
    'Progress: 0.33333'
"""

import logging
import math
from collections.abc import Callable, Sequence
from typing import Protocol

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)

# Progress is shown truncated to this many decimal places
PROGRESS_PLACES = 100000


def round_down_to_place(value: float, place: int) -> float:
    """Truncate a value towards negative infinity at a decimal place.

    Args:
        value: The value to truncate.
        place: A power of ten; 1000 keeps three decimals.

    Returns:
        ``floor(value * place) / place``.
    """
    return math.floor(value * place) / place


class PixelSink(Protocol):
    """What the Renderer needs from a pixel sink."""

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> None: ...

    def set_region(self, x: int, y: int, block: npt.NDArray[np.uint8]) -> None: ...

    def update_progress(self, progress: float) -> None: ...

    def update_elapsed_time(self, milliseconds: int) -> None: ...

    def draw(self) -> None: ...


class FrameBuffer:
    """An 8-bit RGB image plus progress and elapsed-time texts.

    Pixels are stored row-major with y = 0 at the top.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: uint8 array of shape (height, width, 3).
        progress_text: Last progress display text.
        elapsed_time_text: Last elapsed-time display text.
    """

    def __init__(
        self,
        width: int,
        height: int,
        on_draw: Callable[["FrameBuffer"], None] | None = None,
    ) -> None:
        """Initialize a black frame buffer.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
            on_draw: Optional callback run by ``draw``, e.g. to save or show
                the image.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Frame buffer dimensions ({width}x{height}) must be positive")

        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.uint8] = np.zeros((height, width, 3), dtype=np.uint8)
        self.progress_text = ""
        self.elapsed_time_text = ""
        self.draw_count = 0
        self._on_draw = on_draw

    def _check_position(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} frame buffer")

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        self._check_position(x, y)
        red, green, blue = self.pixels[y, x]
        return (int(red), int(green), int(blue))

    def set_pixel(self, x: int, y: int, color: Sequence[float]) -> None:
        """Write one pixel.

        Channels are rounded to the nearest integer and clamped to [0, 255].

        Raises:
            IndexError: If the pixel is outside the frame buffer.
        """
        self._check_position(x, y)
        values = np.nan_to_num(np.asarray(color, dtype=np.float64), nan=0.0)
        self.pixels[y, x] = np.clip(np.rint(values), 0, 255).astype(np.uint8)

    def set_region(self, x: int, y: int, block: npt.NDArray[np.uint8]) -> None:
        """Copy a block of pixels with its top-left corner at (x, y).

        Raises:
            IndexError: If the block does not fit inside the frame buffer.
        """
        block_height, block_width = block.shape[:2]
        if block_width == 0 or block_height == 0:
            return
        self._check_position(x, y)
        self._check_position(x + block_width - 1, y + block_height - 1)
        self.pixels[y : y + block_height, x : x + block_width] = block

    def update_progress(self, progress: float) -> None:
        """Show the overall progress, a fraction in [0, 1]."""
        self.progress_text = f"Progress: {round_down_to_place(progress, PROGRESS_PLACES):g}"
        logger.info(self.progress_text)

    def update_elapsed_time(self, milliseconds: int) -> None:
        """Show the time since the render started."""
        self.elapsed_time_text = f"Time since start in milliseconds: {milliseconds}"
        logger.info(self.elapsed_time_text)

    def draw(self) -> None:
        """Present the finished image."""
        self.draw_count += 1
        if self._on_draw is not None:
            self._on_draw(self)

    def to_numpy(self) -> npt.NDArray[np.uint8]:
        """Get a copy of the pixels."""
        return self.pixels.copy()
