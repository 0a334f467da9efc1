"""Taichi runtime initialization.

Every worker process owns one Taichi runtime. It always runs on the CPU
backend, and with fast math disabled so that NaN and infinity flow through
comparisons the IEEE way: a negative discriminant gives NaN roots that fail
the range test instead of being optimized into a hit.
"""

import logging
import secrets

import taichi as ti

logger = logging.getLogger(__name__)


def draw_seed() -> int:
    """Draw a fresh random seed suitable for ``ti.init``."""
    return secrets.randbelow(2**31)


def init_taichi(seed: int | None = None, num_threads: int | None = 1) -> int:
    """Initialize Taichi for rendering.

    Args:
        seed: Random seed for ``ti.random``. ``None`` draws a fresh one.
        num_threads: Maximum number of CPU threads Taichi may use. Workers use
            1 so that the worker pool is the only source of parallelism.
            ``None`` keeps Taichi's default.

    Returns:
        The seed Taichi was initialized with.
    """
    if seed is None:
        seed = draw_seed()

    options = {"arch": ti.cpu, "fast_math": False, "random_seed": seed}
    if num_threads is not None:
        options["cpu_max_num_threads"] = num_threads

    ti.init(**options)
    logger.debug("Taichi initialized (seed=%d, threads=%s)", seed, num_threads)
    return seed
