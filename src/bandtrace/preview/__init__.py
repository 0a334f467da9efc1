"""Preview module: frame buffer, colour conversion and output.

Components:
    framebuffer: FrameBuffer, the 8-bit pixel sink with status texts
    display: Linear to sRGB conversion and the Matplotlib preview
    export: PNG export via Pillow

Example:
    >>> from bandtrace.preview import save_png, show_preview
    >>> frame_buffer = renderer.draw()
    >>> save_png(frame_buffer, "output.png")
    >>> show_preview(frame_buffer)
"""

from bandtrace.preview.display import (
    linear_to_display_bytes,
    linear_to_srgb,
    linear_value_to_srgb,
    show_preview,
)
from bandtrace.preview.export import image_to_uint8, save_png, save_png_from_array
from bandtrace.preview.framebuffer import FrameBuffer, PixelSink, round_down_to_place

__all__ = [
    # Frame buffer
    "FrameBuffer",
    "PixelSink",
    "round_down_to_place",
    # Colour conversion and display
    "linear_value_to_srgb",
    "linear_to_srgb",
    "linear_to_display_bytes",
    "show_preview",
    # Export
    "save_png",
    "save_png_from_array",
    "image_to_uint8",
]
