"""Render worker: the process side of the band protocol.

A worker process is started with ``worker_main`` as its target. It waits for
one PreloadMessage on its inbox, initializes its own Taichi runtime, renders
its band while posting ProgressMessages to the shared outbox, and finishes by
posting a single RenderMessage.

Example:
    >>> from bandtrace.core.config import RenderConfig
    >>> from bandtrace.core.runtime import init_taichi
    >>> from bandtrace.render.partition import partition_canvas
    >>> from bandtrace.render.worker import RenderWorker
    >>> from bandtrace.scene import create_default_scene
    >>>
    >>> init_taichi(seed=0)
    >>> config = RenderConfig(canvas_width=32, canvas_height=18, samples_per_pixel=4, threads=1)
    >>> span = partition_canvas(32, 18, 1)[0]
    >>> worker = RenderWorker(0, config, (0.0, 0.0, 0.0), create_default_scene(), span)
    >>> message = worker.draw()
    >>> message.pixels.shape
    (18, 32, 3)
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from bandtrace.core.config import RenderConfig
from bandtrace.core.integrator import BandSampler
from bandtrace.core.runtime import init_taichi
from bandtrace.render.messages import PreloadMessage, ProgressMessage, RenderMessage
from bandtrace.render.partition import WorkerSpan
from bandtrace.scene.intersection import SceneFields
from bandtrace.scene.manager import EntityManager

logger = logging.getLogger(__name__)

# Type alias for the sink of progress messages
ProgressSink = Callable[[ProgressMessage], None]


class RenderWorker:
    """Renders one band of the canvas.

    Taichi must be initialized before ``draw`` is called; ``worker_main``
    does that for worker processes.

    Attributes:
        worker_index: Index of this worker.
        config: The render configuration.
        camera_position: Camera position as (x, y, z).
        scene: The worker's own copy of the scene.
        span: The band to render.
    """

    def __init__(
        self,
        worker_index: int,
        config: RenderConfig,
        camera_position: tuple[float, float, float],
        scene: EntityManager,
        span: WorkerSpan,
    ) -> None:
        self.worker_index = worker_index
        self.config = config
        self.camera_position = camera_position
        self.scene = scene
        self.span = span

    @classmethod
    def from_preload(cls, message: PreloadMessage) -> "RenderWorker":
        """Build a worker from a preload message, decoding the raw scene."""
        return cls(
            worker_index=message.worker_index,
            config=message.config,
            camera_position=tuple(message.camera_position),
            scene=EntityManager.from_raw(message.scene),
            span=message.span,
        )

    @property
    def seed(self) -> int | None:
        """Random seed of this worker, or None for a fresh one."""
        if self.config.seed is None:
            return None
        return self.config.seed + self.worker_index

    def draw(
        self,
        on_progress: ProgressSink | None = None,
        clock: Callable[[], float] = time.time,
    ) -> RenderMessage:
        """Render the band.

        Args:
            on_progress: Optional sink for the progress messages sent while
                rendering, about once per second.
            clock: Wall-clock time source in seconds.

        Returns:
            The RenderMessage holding the band's linear-space pixels.
        """
        fields = SceneFields()
        fields.load(self.scene)
        sampler = BandSampler(fields, self.config, self.camera_position, self.span)

        def report(progress: float) -> None:
            if on_progress is not None:
                on_progress(ProgressMessage(worker_index=self.worker_index, progress=progress))

        pixels = sampler.render(on_progress=report, clock=clock)
        return RenderMessage(worker_index=self.worker_index, pixels=pixels)


def worker_main(inbox: Any, outbox: Any) -> None:
    """Entry point of a worker process.

    Args:
        inbox: Queue this worker receives its PreloadMessage on.
        outbox: Queue shared by all workers for progress and render messages.

    Raises:
        RuntimeError: If the first message is not a PreloadMessage.
    """
    message = inbox.get()
    if not isinstance(message, PreloadMessage):
        raise RuntimeError(f"[RenderWorker]: Expected a preload message, got {message!r}")

    worker = RenderWorker.from_preload(message)
    init_taichi(seed=worker.seed, num_threads=1)
    logger.debug("Worker %d rendering %s", worker.worker_index, worker.span)

    outbox.put(worker.draw(on_progress=outbox.put))
