"""Monte Carlo path tracer for one horizontal band of the canvas.

This module provides:
- ``trace_ray``: the recursive light transport, unrolled into a loop that
  carries the product of the attenuations seen so far
- ``BandSampler``: samples every pixel of a WorkerSpan and reports progress

Light transport, for a ray and a remaining depth:
- depth 0: black
- miss: the sky gradient, ``(1 - s) * white + s * (0.5, 0.7, 1.0)`` with
  ``s = (direction.y + 1) / 2``
- hit on a scattering material: attenuation times the light of the scattered
  ray at depth - 1
- hit on an absorbing material: black

No surface emits light; the sky is the only light source.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from bandtrace.core.config import RenderConfig
    >>> from bandtrace.core.integrator import BandSampler
    >>> from bandtrace.render.partition import partition_canvas
    >>> from bandtrace.scene import SceneFields, create_default_scene
    >>>
    >>> config = RenderConfig(canvas_width=64, canvas_height=36, samples_per_pixel=4, threads=1)
    >>> scene = SceneFields()
    >>> scene.load(create_default_scene())
    >>> span = partition_canvas(64, 36, 1)[0]
    >>> sampler = BandSampler(scene, config, (0.0, 0.0, 0.0), span)
    >>> pixels = sampler.render()  # (36, 64, 3) float32, linear colour
"""

import logging
import math
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti

from bandtrace.core.config import RenderConfig
from bandtrace.core.ray import Ray
from bandtrace.core.vector import multiply, normalize, random_scalar, vec3
from bandtrace.geometry.hit import MAXIMUM_TIME
from bandtrace.materials.scatter import scatter

if TYPE_CHECKING:
    from bandtrace.render.partition import WorkerSpan
    from bandtrace.scene.intersection import SceneFields

logger = logging.getLogger(__name__)

# Smallest ray time accepted as a hit, avoids self-intersection of scattered rays
MINIMUM_TIME = 0.001

# Sky gradient endpoints
SKY_HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
SKY_ZENITH_COLOR = vec3(0.5, 0.7, 1.0)

# Samples are jittered within this fraction of a pixel step in each direction
JITTER = 1.0 / 3.0

# Type alias for progress callback, receives the finished fraction of the band
ProgressCallback = Callable[[float], None]


# =============================================================================
# Light Transport
# =============================================================================


@ti.func
def sky_color(direction: vec3) -> vec3:
    """Colour of a ray that escapes the scene.

    Args:
        direction: Direction of the escaping ray. Its y component is assumed to
            lie in [-1, 1], which holds for Chebyshev-normalized directions.

    Returns:
        White at y = -1 blending linearly to light blue at y = 1.
    """
    s = (direction.y + 1.0) * 0.5
    return SKY_HORIZON_COLOR * (1.0 - s) + SKY_ZENITH_COLOR * s


@ti.func
def camera_ray(camera_position: vec3, viewport_point: vec3) -> Ray:
    """Build the ray from the camera through a point on the viewport."""
    return Ray(origin=camera_position, direction=normalize(viewport_point - camera_position))


@ti.func
def trace_ray(scene: ti.template(), ray: Ray, depth: ti.i32) -> vec3:
    """Estimate the light arriving along a ray.

    Args:
        scene: The SceneFields to intersect against.
        ray: The ray to trace.
        depth: Maximum number of ray segments. 0 returns black.

    Returns:
        The linear-space colour carried back along the ray.
    """
    color = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(1.0, 1.0, 1.0)
    current = ray

    # Active flag for path continuation (no break out of ti.func loops)
    active = 1

    for _ in range(depth):
        if active == 1:
            information = scene.hit(current, MINIMUM_TIME, MAXIMUM_TIME)

            if information.hit == 0:
                color = multiply(attenuation, sky_color(current.direction))
                active = 0
            else:
                scatter_information = scatter(current, information)
                if scatter_information.scattered == 0:
                    # Absorbed
                    active = 0
                else:
                    attenuation = multiply(attenuation, scatter_information.attenuation)
                    current = scatter_information.scattered_ray

    # A path still active here ran out of depth and stays black
    return color


# =============================================================================
# Band Sampler
# =============================================================================


@ti.data_oriented
class BandSampler:
    """Samples every pixel of one band of the canvas.

    Pixel coordinates stay in canvas space: the viewport point of pixel
    (row, column) is the same whichever band renders it.

    Attributes:
        config: The render configuration.
        span: The band of the canvas to render.
        pixels: Linear-space colours of the band, indexed [row, column]
            relative to the span's top-left corner.
    """

    def __init__(
        self,
        scene: "SceneFields",
        config: RenderConfig,
        camera_position: tuple[float, float, float],
        span: "WorkerSpan",
    ) -> None:
        """Allocate the band buffer.

        Args:
            scene: The scene, already loaded.
            config: The render configuration.
            camera_position: Camera position in world space.
            span: The band to render.

        Raises:
            ValueError: If the span is empty or outside the canvas.
        """
        if span.width < 1 or span.height < 1:
            raise ValueError(f"Cannot sample an empty span: {span}")
        if span.end_x > config.canvas_width or span.end_y > config.canvas_height:
            raise ValueError(
                f"Span {span} is outside the {config.canvas_width}x{config.canvas_height} canvas"
            )

        self.scene = scene
        self.config = config
        self.span = span

        # Plain integers, read as compile-time constants by the kernels
        self.start_x = span.start_x
        self.start_y = span.start_y
        self.width = span.width
        self.height = span.height
        self.samples_per_pixel = config.samples_per_pixel
        self.max_bounces_per_ray = config.max_bounces_per_ray

        self.pixels = ti.Vector.field(3, dtype=ti.f32, shape=(span.height, span.width))
        # Running sample sums of the row being rendered
        self.sums = ti.Vector.field(3, dtype=ti.f32, shape=span.width)

        # Camera and viewport geometry
        self.camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.viewport_start = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.delta_width = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.delta_height = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.camera_position[None] = camera_position
        self.viewport_start[None] = config.viewport_start
        self.delta_width[None] = config.delta_width
        self.delta_height[None] = config.delta_height

        self._finished_pixels = 0

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def finished_pixels(self) -> int:
        return self._finished_pixels

    @property
    def progress(self) -> float:
        """Fraction of the band's pixels sampled so far."""
        return self._finished_pixels / self.pixel_count

    @ti.func
    def _viewport_point(self, row: ti.i32, column: ti.i32) -> vec3:
        return (
            self.viewport_start[None]
            + ti.cast(row, ti.f32) * self.delta_height[None]
            + ti.cast(column, ti.f32) * self.delta_width[None]
        )

    @ti.func
    def _jittered_sample(self, row: ti.i32, column: ti.i32) -> vec3:
        """Trace one jittered camera ray through a canvas pixel."""
        jittered = (
            self._viewport_point(row, column)
            + random_scalar(-JITTER, JITTER) * self.delta_width[None]
            + random_scalar(-JITTER, JITTER) * self.delta_height[None]
        )
        ray = camera_ray(self.camera_position[None], jittered)
        return trace_ray(self.scene, ray, self.max_bounces_per_ray)

    @ti.kernel
    def _accumulate_row_sample(self, row: ti.i32):
        """Add one sample to every pixel of one band row (row is relative to the span)."""
        for column in range(self.width):
            self.sums[column] += self._jittered_sample(self.start_y + row, self.start_x + column)

    @ti.kernel
    def _resolve_row(self, row: ti.i32):
        """Average the accumulated samples into the band buffer and reset the sums."""
        for column in range(self.width):
            self.pixels[row, column] = self.sums[column] / self.samples_per_pixel
            self.sums[column] = vec3(0.0, 0.0, 0.0)

    @ti.kernel
    def _sample_single_pixel(self, row: ti.i32, column: ti.i32) -> vec3:
        total = vec3(0.0, 0.0, 0.0)
        ti.loop_config(serialize=True)
        for _ in range(self.samples_per_pixel):
            total += self._jittered_sample(row, column)
        return total / self.samples_per_pixel

    def sample_pixel(self, row: int, column: int) -> tuple[float, float, float]:
        """Sample one canvas pixel without touching the band buffer.

        Used for testing and debugging individual pixels.

        Args:
            row: Canvas row (0 = top).
            column: Canvas column (0 = left).

        Returns:
            Tuple of (R, G, B) linear colour values.
        """
        color = self._sample_single_pixel(row, column)
        return (float(color[0]), float(color[1]), float(color[2]))

    def render(
        self,
        on_progress: ProgressCallback | None = None,
        clock: Callable[[], float] = time.time,
    ) -> npt.NDArray[np.float32]:
        """Sample the whole band, reporting progress about once per second.

        Rows are sampled one at a time. Each kernel launch adds one sample to
        every pixel of the row, and the clock is checked after every such
        sample pass. Once it passes the next report time (initially the start
        time rounded up to a whole second) ``on_progress`` is called with the
        fraction of finished pixels and the report time advances by exactly
        one second. A row's pixels count as finished after its last pass.

        Args:
            on_progress: Optional callback receiving the finished fraction.
            clock: Wall-clock time source in seconds.

        Returns:
            Linear-space colours of the band, shape (height, width, 3).
        """
        next_report_time = math.ceil(clock())
        self._finished_pixels = 0
        self.sums.fill(0.0)

        for row in range(self.height):
            for sample in range(self.samples_per_pixel):
                self._accumulate_row_sample(row)
                if sample == self.samples_per_pixel - 1:
                    self._resolve_row(row)
                    self._finished_pixels += self.width

                now = clock()
                if now > next_report_time:
                    if on_progress is not None:
                        on_progress(self.progress)
                    next_report_time += 1

        logger.debug("Sampled band %s", self.span)
        return self.pixels.to_numpy()
