"""Ray-sphere intersection.

The intersection solves the full quadratic

    a*t^2 + b*t + c = 0

with ``a = d.d``, ``b = 2 d.(o - center)`` and
``c = (o - center).(o - center) - radius^2``. Both roots are always computed.
A negative discriminant makes them NaN, and NaN fails every comparison of the
range test below, so no special case is needed as long as Taichi runs without
fast math.

A root is usable when ``minimum_time <= t <= maximum_time``. The lowest usable
root below ``MAXIMUM_TIME`` is the hit.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from bandtrace.geometry.sphere import hit_sphere
    >>> # Within a Taichi kernel, for a sphere at (0, 0, -4) of radius 2 and a
    >>> # ray from the origin along -z:
    >>> # info = hit_sphere(center, 2.0, material, ray, 0.001, MAXIMUM_TIME)
    >>> # info.time == 2.0, info.normal == vec3(0, 0, 1)
"""

import taichi as ti

from bandtrace.core.ray import Ray, ray_at
from bandtrace.core.vector import dot, negate, normalize, vec3
from bandtrace.geometry.hit import MAXIMUM_TIME, HitInformation, empty_hit
from bandtrace.materials.material import Material


@ti.func
def _solve_quadratic(a: ti.f32, b: ti.f32, c: ti.f32):
    """Solve a*t^2 + b*t + c = 0 with the textbook formula.

    Returns:
        Tuple of (near, far). Both are NaN when the discriminant is negative.
    """
    root = ti.sqrt(b * b - 4.0 * a * c)
    near = (-b - root) / (2.0 * a)
    far = (-b + root) / (2.0 * a)
    return near, far


@ti.func
def sphere_normal(center: vec3, position: vec3, direction: vec3):
    """Compute the surface normal facing an incoming ray.

    Args:
        center: The sphere center.
        position: The hit position on the sphere.
        direction: The direction of the incoming ray.

    Returns:
        Tuple of (normal, outward_face). The normal is the Chebyshev-normalized
        ``position - center``, negated when the ray comes from inside.
    """
    normal = normalize(position - center)
    outward_face = 1
    if dot(direction, normal) >= 0.0:
        outward_face = 0
        normal = negate(normal)
    return normal, outward_face


@ti.func
def hit_sphere(
    center: vec3,
    radius: ti.f32,
    material: Material,
    ray: Ray,
    minimum_time: ti.f32,
    maximum_time: ti.f32,
) -> HitInformation:
    """Intersect a ray with a sphere.

    Args:
        center: The sphere center.
        radius: The sphere radius. Must not be zero.
        material: The material reported with the hit.
        ray: The ray to test.
        minimum_time: Smallest accepted ray time (avoids self-intersection).
        maximum_time: Largest accepted ray time.

    Returns:
        A HitInformation. ``hit`` is 1 only if a root fell inside the time
        range; otherwise the empty hit is returned.
    """
    offset = ray.origin - center
    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(ray.direction, offset)
    c = dot(offset, offset) - radius * radius

    near, far = _solve_quadratic(a, b, c)

    lowest = MAXIMUM_TIME
    if near >= minimum_time and near <= maximum_time and near < lowest:
        lowest = near
    if far >= minimum_time and far <= maximum_time and far < lowest:
        lowest = far

    result = empty_hit()
    if lowest < MAXIMUM_TIME:
        position = ray_at(ray, lowest)
        normal, outward_face = sphere_normal(center, position, ray.direction)
        result = HitInformation(
            hit=1,
            position=position,
            time=lowest,
            normal=normal,
            outward_face=outward_face,
            material=material,
        )

    return result
