"""Core rendering module.

Components:
    vector: Vector algebra and random sampling (Chebyshev normalization)
    ray: Ray data structure
    config: RenderConfig, the fixed parameters of a render session
    runtime: Taichi initialization for renderer processes
    integrator: Path tracer and the per-band sampler

The integrator is NOT imported here since it depends on the materials and
geometry packages, which import this one. Import it directly from
bandtrace.core.integrator.
"""

from .config import RenderConfig
from .ray import Ray, empty_ray, make_ray, ray_at
from .runtime import init_taichi
from .vector import (
    add,
    dot,
    exponentiate,
    multiply,
    negate,
    normalize,
    random_scalar,
    random_unit_vector,
    random_vector,
    reciprocate,
    vec3,
)

__all__ = [
    "RenderConfig",
    "init_taichi",
    "Ray",
    "ray_at",
    "make_ray",
    "empty_ray",
    "vec3",
    "add",
    "multiply",
    "exponentiate",
    "dot",
    "negate",
    "reciprocate",
    "normalize",
    "random_scalar",
    "random_vector",
    "random_unit_vector",
]
