"""Diffuse material.

A diffuse surface scatters every incoming ray. The new direction is the
surface normal plus a random direction drawn with ``random_unit_vector``; it is
left unnormalized and may, rarely, be the zero vector. The attenuation is the
material's base colour.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from bandtrace.materials.diffuse import scatter_diffuse
    >>> # Within a Taichi kernel:
    >>> # result = scatter_diffuse(color, hit_position, hit_normal)
    >>> # result.scattered == 1, result.attenuation == color
"""

import taichi as ti

from bandtrace.core.ray import Ray
from bandtrace.core.vector import add, random_unit_vector, vec3
from bandtrace.materials.material import ScatterInformation


@ti.func
def diffuse_direction(normal: vec3) -> vec3:
    """Sample a scatter direction around a surface normal.

    Args:
        normal: The surface normal facing the incoming ray.

    Returns:
        ``normal + random_unit_vector(-1, 1)``. Not normalized.
    """
    return add(normal, random_unit_vector(-1.0, 1.0))


@ti.func
def scatter_diffuse(color: vec3, position: vec3, normal: vec3) -> ScatterInformation:
    """Scatter a ray off a diffuse surface.

    Args:
        color: Base colour of the material.
        position: Hit position, which becomes the new ray origin.
        normal: Surface normal at the hit, facing the incoming ray.

    Returns:
        A ScatterInformation with scattered == 1 and the material colour as
        attenuation.
    """
    return ScatterInformation(
        scattered=1,
        attenuation=color,
        scattered_ray=Ray(origin=position, direction=diffuse_direction(normal)),
    )
