"""Material dispatch.

``scatter`` picks the scatter model from the material tag of a hit. Unknown
tags behave like the invalid material and absorb the ray.
"""

import taichi as ti

from bandtrace.materials.diffuse import scatter_diffuse
from bandtrace.materials.material import MATERIAL_DIFFUSE, ScatterInformation, empty_scatter


@ti.func
def scatter(ray, hit_information) -> ScatterInformation:
    """Scatter an incoming ray at a surface hit.

    Args:
        ray: The incoming ray. None of the current materials depend on it.
        hit_information: The HitInformation of the surface that was hit.

    Returns:
        The material's ScatterInformation, or the empty one if the material
        does not scatter.
    """
    result = empty_scatter()
    material = hit_information.material

    if material.kind == MATERIAL_DIFFUSE:
        result = scatter_diffuse(material.color, hit_information.position, hit_information.normal)

    return result
