"""Messages exchanged between the Renderer and its workers.

Every message is a frozen dataclass that pickles by value across the process
boundary. Each carries its ``MessageType`` tag and the index of the worker it
concerns.

Per worker the sequence is fixed:

    Renderer -> worker:  PreloadMessage
    worker -> Renderer:  ProgressMessage*  RenderMessage
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

import numpy as np
import numpy.typing as npt

from bandtrace.core.config import RenderConfig
from bandtrace.render.partition import WorkerSpan


class MessageType(IntEnum):
    PRELOAD = 0
    PROGRESS = 1
    RENDER = 2


@dataclass(frozen=True)
class PreloadMessage:
    """Everything a worker needs to render its band.

    Attributes:
        worker_index: Index of the receiving worker.
        config: The render configuration.
        camera_position: Camera position as (x, y, z).
        scene: Raw snapshot of the scene (``EntityManager.to_raw()``).
        span: The band to render.
    """

    worker_index: int
    config: RenderConfig
    camera_position: tuple[float, float, float]
    scene: dict[str, Any]
    span: WorkerSpan
    message_type: MessageType = field(default=MessageType.PRELOAD, init=False)


@dataclass(frozen=True)
class ProgressMessage:
    """Fraction of a worker's band finished so far, in [0, 1]."""

    worker_index: int
    progress: float
    message_type: MessageType = field(default=MessageType.PROGRESS, init=False)


@dataclass(frozen=True)
class RenderMessage:
    """The finished band of a worker.

    Attributes:
        worker_index: Index of the sending worker.
        pixels: Linear-space colours, shape (span height, span width, 3).
    """

    worker_index: int
    pixels: npt.NDArray[np.float32]
    message_type: MessageType = field(default=MessageType.RENDER, init=False)


WorkerMessage = ProgressMessage | RenderMessage
