"""Renderer: the orchestrator side of the band protocol.

The Renderer splits the canvas into ``config.threads`` horizontal bands and
starts one worker process per band. Workers post their messages to a single
shared results queue, which the Renderer drains until every band is merged.

Per worker the state moves Dispatched -> (Progress)* -> Completed:
- Progress messages record the worker's progress. Once every worker has
  reported at least once, the progress and elapsed-time displays refresh at
  most once per second.
- A render message tears the worker down, marks it complete and merges its
  band into the frame buffer, converting linear colour to sRGB bytes. After
  the last band the frame buffer is drawn and the displays refresh.

There is no cancellation, timeout or retry. A worker that dies without
sending its render message leaves ``draw`` waiting.

Example:
    >>> from bandtrace.core.config import RenderConfig
    >>> from bandtrace.render.renderer import Renderer
    >>> from bandtrace.scene import create_default_scene
    >>>
    >>> renderer = Renderer(RenderConfig(canvas_width=160, canvas_height=90, samples_per_pixel=8))
    >>> for entity in create_default_scene().entities:
    ...     renderer.add_entity(entity)
    >>> frame_buffer = renderer.draw()
    >>> frame_buffer.get_pixel(80, 45)
"""

import logging
import math
import multiprocessing
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from bandtrace.core.config import RenderConfig
from bandtrace.preview.display import linear_to_display_bytes
from bandtrace.preview.framebuffer import FrameBuffer, PixelSink
from bandtrace.render.messages import (
    MessageType,
    PreloadMessage,
    ProgressMessage,
    RenderMessage,
    WorkerMessage,
)
from bandtrace.render.partition import WorkerSpan, band_span
from bandtrace.render.worker import worker_main
from bandtrace.scene.manager import EntityManager
from bandtrace.scene.records import EntityInfo

logger = logging.getLogger(__name__)


@dataclass
class WorkerInformation:
    """Orchestrator-side bookkeeping for one worker.

    Attributes:
        handle: The worker's process.
        inbox: The queue the worker receives its preload message on.
        span: The band assigned to the worker.
        progress: Last reported progress, 1.0 once the band is merged.
        responded: Whether the worker has sent at least one progress message.
    """

    handle: Any
    inbox: Any
    span: WorkerSpan
    progress: float = 0.0
    responded: bool = False


class Renderer:
    """Dispatches band workers and merges their results.

    A Renderer draws once. Entities are added before ``draw`` is called and
    are copied into every worker by value.

    Attributes:
        config: The render configuration.
        frame_buffer: The pixel sink receiving the merged image.
        camera_position: Camera position as (x, y, z).
    """

    def __init__(
        self,
        config: RenderConfig | None = None,
        frame_buffer: PixelSink | None = None,
        camera_position: tuple[float, float, float] = (0.0, 0.0, 0.0),
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the renderer.

        Args:
            config: The render configuration. Defaults to ``RenderConfig()``.
            frame_buffer: Pixel sink for the merged image. Defaults to a new
                FrameBuffer of the canvas size.
            camera_position: Camera position in world space.
            clock: Wall-clock time source in seconds.
        """
        self.config = config if config is not None else RenderConfig()
        if frame_buffer is None:
            frame_buffer = FrameBuffer(self.config.canvas_width, self.config.canvas_height)
        self.frame_buffer = frame_buffer
        self.camera_position = tuple(float(c) for c in camera_position)

        self._entity_manager = EntityManager()
        self._clock = clock

        self._worker_render_count = 0
        self._worker_informations: dict[int, WorkerInformation] = {}

        self._start_time = 0.0
        self._end_time = 0.0
        self._next_progress_update_time = math.ceil(clock())

    @property
    def entity_manager(self) -> EntityManager:
        return self._entity_manager

    @property
    def worker_render_count(self) -> int:
        """Number of workers whose band has been merged."""
        return self._worker_render_count

    @property
    def is_complete(self) -> bool:
        return self._worker_render_count == self.config.threads

    def add_entity(self, entity: EntityInfo) -> None:
        """Add an entity to the scene. Has no effect on a running draw."""
        self._entity_manager.add_entity(entity)

    def elapsed_milliseconds(self) -> int:
        """Milliseconds between the start of ``draw`` and the last display refresh."""
        return round((self._end_time - self._start_time) * 1000)

    def get_worker_information(self, worker_index: int) -> WorkerInformation:
        """Look up a worker's bookkeeping.

        Raises:
            RuntimeError: If no worker has this index.
        """
        worker_information = self._worker_informations.get(worker_index)
        if worker_information is None:
            raise RuntimeError(f"[Renderer]: Invalid workerIndex: {worker_index}")
        return worker_information

    # =========================================================================
    # Dispatch
    # =========================================================================

    def draw(self, context: Any = None) -> PixelSink:
        """Render the scene and block until every band is merged.

        Args:
            context: A multiprocessing context providing ``Process`` and
                ``Queue``. Defaults to the "spawn" context, since every worker
                needs a fresh Taichi runtime.

        Returns:
            The frame buffer holding the finished image.

        Raises:
            RuntimeError: If draw has already been called on this renderer.
        """
        if self._worker_informations:
            raise RuntimeError("[Renderer]: draw() already called")
        if context is None:
            context = multiprocessing.get_context("spawn")

        results = context.Queue()
        self._start_time = self._clock()
        logger.info(
            "Rendering %dx%d with %d workers (%d samples per pixel, %d bounces)",
            self.config.canvas_width,
            self.config.canvas_height,
            self.config.threads,
            self.config.samples_per_pixel,
            self.config.max_bounces_per_ray,
        )

        for worker_index in range(self.config.threads):
            self._create_worker(worker_index, context, results)

        while not self.is_complete:
            self.on_message(results.get())

        results.close()
        logger.info("Render finished in %d ms", self.elapsed_milliseconds())
        return self.frame_buffer

    def _create_worker(self, worker_index: int, context: Any, results: Any) -> None:
        span = band_span(
            self.config.canvas_width, self.config.canvas_height, self.config.threads, worker_index
        )
        inbox = context.Queue()
        handle = context.Process(
            target=worker_main,
            args=(inbox, results),
            name=f"bandtrace-worker-{worker_index}",
            daemon=True,
        )

        self._worker_informations[worker_index] = WorkerInformation(handle=handle, inbox=inbox, span=span)

        handle.start()
        inbox.put(
            PreloadMessage(
                worker_index=worker_index,
                config=self.config,
                camera_position=self.camera_position,
                scene=self._entity_manager.to_raw(),
                span=span,
            )
        )
        logger.debug("Dispatched worker %d for rows [%d, %d)", worker_index, span.start_y, span.end_y)

    # =========================================================================
    # Messages
    # =========================================================================

    def on_message(self, message: WorkerMessage) -> None:
        """Handle one message from a worker.

        Raises:
            RuntimeError: If the message type or worker index is unknown.
        """
        message_type = getattr(message, "message_type", None)
        if message_type == MessageType.RENDER:
            self._on_render(message)
        elif message_type == MessageType.PROGRESS:
            self._on_progress(message)
        else:
            raise RuntimeError(f"[Renderer]: Unexpected message: {message!r}")

    def _on_progress(self, message: ProgressMessage) -> None:
        logger.debug("Worker %d progress %.3f", message.worker_index, message.progress)
        self._update_worker_progress(message.worker_index, message.progress)

        if self._all_workers_responded() and self._clock() > self._next_progress_update_time:
            self._next_progress_update_time += 1
            self._update_displays()

    def _update_worker_progress(self, worker_index: int, progress: float) -> None:
        worker_information = self.get_worker_information(worker_index)
        worker_information.progress = progress
        worker_information.responded = True

    def _all_workers_responded(self) -> bool:
        return all(
            self.get_worker_information(worker_index).responded
            for worker_index in range(self.config.threads)
        )

    def _on_render(self, message: RenderMessage) -> None:
        self._terminate_worker(message.worker_index)
        self._load_worker_render(message.worker_index, message)
        logger.info(
            "Worker %d finished (%d/%d)",
            message.worker_index,
            self._worker_render_count,
            self.config.threads,
        )

        if self.is_complete:
            self.frame_buffer.draw()
            self._update_displays()

    def _terminate_worker(self, worker_index: int) -> None:
        worker_information = self.get_worker_information(worker_index)
        worker_information.handle.join()
        worker_information.handle.close()
        worker_information.inbox.close()
        worker_information.progress = 1.0
        self._worker_render_count += 1

    def _load_worker_render(self, worker_index: int, message: RenderMessage) -> None:
        span = self.get_worker_information(worker_index).span
        expected_shape = (span.height, span.width, 3)
        if message.pixels.shape != expected_shape:
            raise RuntimeError(
                f"[Renderer]: Worker {worker_index} sent pixels of shape "
                f"{message.pixels.shape}, expected {expected_shape}"
            )
        self.frame_buffer.set_region(span.start_x, span.start_y, linear_to_display_bytes(message.pixels))

    # =========================================================================
    # Displays
    # =========================================================================

    def _update_displays(self) -> None:
        self._update_progress()
        self._update_total_time()

    def _update_progress(self) -> None:
        total = sum(
            self.get_worker_information(worker_index).progress
            for worker_index in range(self.config.threads)
        )
        self.frame_buffer.update_progress(total / self.config.threads)

    def _update_total_time(self) -> None:
        self._end_time = self._clock()
        self.frame_buffer.update_elapsed_time(self.elapsed_milliseconds())
