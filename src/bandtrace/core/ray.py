"""Ray data structure.

A ray is an origin plus a direction. Directions are not required to have any
particular length: camera rays are Chebyshev-normalized and scattered rays
are not normalized at all.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from bandtrace.core.ray import Ray, ray_at, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    >>> # Within a Taichi kernel: ray_at(ray, 5.0) == vec3(0.0, 0.0, -5.0)
"""

import taichi as ti

from bandtrace.core.vector import vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not normalized in
            general.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The ray time. Positive values are in front of the origin.

    Returns:
        The point ray.origin + ray.direction * t.
    """
    return ray.origin + ray.direction * t


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


@ti.func
def empty_ray() -> Ray:
    """Create a ray with zero origin and zero direction."""
    return Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, 0.0))
