"""Band rendering: partitioning, worker protocol and orchestration.

Components:
    partition: WorkerSpan and the split of the canvas into horizontal bands
    messages: Preload, progress and render messages
    worker: RenderWorker and the worker process entry point
    renderer: Renderer, which dispatches workers and merges their bands
"""

from .messages import MessageType, PreloadMessage, ProgressMessage, RenderMessage
from .partition import WorkerSpan, band_span, partition_canvas
from .renderer import Renderer, WorkerInformation
from .worker import RenderWorker, worker_main

__all__ = [
    "WorkerSpan",
    "band_span",
    "partition_canvas",
    "MessageType",
    "PreloadMessage",
    "ProgressMessage",
    "RenderMessage",
    "RenderWorker",
    "worker_main",
    "Renderer",
    "WorkerInformation",
]
