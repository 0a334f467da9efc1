"""Render configuration.

A ``RenderConfig`` is fixed for a whole render session. It is passed by value
to the orchestrator and, inside each preload message, to every worker.

Example:
    >>> from bandtrace.core.config import RenderConfig
    >>> config = RenderConfig(canvas_width=320, canvas_height=180, samples_per_pixel=16)
    >>> config.viewport_width
    3.5555555555555554
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# Defaults of a full-quality render
DEFAULT_CANVAS_WIDTH = 640
DEFAULT_CANVAS_HEIGHT = 360
DEFAULT_MAX_BOUNCES_PER_RAY = 50
DEFAULT_SAMPLES_PER_PIXEL = 100
DEFAULT_VIEWPORT_HEIGHT = 2.0
DEFAULT_THREADS = 3


@dataclass(frozen=True)
class RenderConfig:
    """Fixed parameters of a render session.

    Attributes:
        canvas_width: Width of the output image in pixels.
        canvas_height: Height of the output image in pixels.
        max_bounces_per_ray: Recursion cap of the path tracer. A value of 1
            only traces the camera ray, so anything it hits is black.
        samples_per_pixel: Number of jittered samples averaged per pixel.
        viewport_height: Height of the viewport in world units. The viewport
            sits at z = -1 in front of the camera.
        threads: Number of worker processes, one horizontal band each.
        seed: Base random seed. Worker ``i`` uses ``seed + i``. ``None``
            draws a fresh seed per worker.
    """

    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    max_bounces_per_ray: int = DEFAULT_MAX_BOUNCES_PER_RAY
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    viewport_height: float = DEFAULT_VIEWPORT_HEIGHT
    threads: int = DEFAULT_THREADS
    seed: int | None = None

    def __post_init__(self) -> None:
        """Validate the configuration.

        Raises:
            ValueError: If any size or count is out of range.
        """
        if self.canvas_width < 1 or self.canvas_height < 1:
            raise ValueError(
                f"Canvas dimensions ({self.canvas_width}x{self.canvas_height}) must be positive"
            )
        if self.max_bounces_per_ray < 0:
            raise ValueError(f"max_bounces_per_ray must be >= 0, got {self.max_bounces_per_ray}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be >= 1, got {self.samples_per_pixel}")
        if self.viewport_height <= 0.0:
            raise ValueError(f"viewport_height must be positive, got {self.viewport_height}")
        if self.threads < 1:
            raise ValueError(f"threads must be >= 1, got {self.threads}")
        if self.threads > self.canvas_height:
            raise ValueError(
                f"threads ({self.threads}) cannot exceed canvas_height ({self.canvas_height})"
            )

    @property
    def viewport_width(self) -> float:
        """Viewport width derived from the canvas aspect ratio."""
        return self.canvas_width / self.canvas_height * self.viewport_height

    @property
    def viewport_start(self) -> tuple[float, float, float]:
        """Top-left corner of the viewport, on the plane z = -1."""
        return (-self.viewport_width / 2.0, self.viewport_height / 2.0, -1.0)

    @property
    def delta_width(self) -> tuple[float, float, float]:
        """Viewport step from one pixel column to the next."""
        return (self.viewport_width / self.canvas_width, 0.0, 0.0)

    @property
    def delta_height(self) -> tuple[float, float, float]:
        """Viewport step from one pixel row to the next (rows go down)."""
        return (0.0, -self.viewport_height / self.canvas_height, 0.0)

    @property
    def pixel_count(self) -> int:
        return self.canvas_width * self.canvas_height

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a configuration from a dictionary, using defaults for missing keys.

        Raises:
            ValueError: If the dictionary has unknown keys or invalid values.
        """
        known = set(cls.__dataclass_fields__)
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown render configuration keys: {sorted(unknown)}")
        return cls(**data)
