"""Material records shared by every material model.

Materials are a closed set of variants tagged by ``MaterialType``. On the
device a material is a flat ``Material`` struct holding its tag and the
parameters of every variant; the scatter functions dispatch on the tag.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from bandtrace.materials.material import MATERIAL_DIFFUSE, Material, vec3
    >>> red = Material(kind=MATERIAL_DIFFUSE, color=vec3(1.0, 0.0, 0.0))
"""

from enum import IntEnum

import taichi as ti

from bandtrace.core.ray import Ray, empty_ray
from bandtrace.core.vector import vec3


class MaterialType(IntEnum):
    """Material variants.

    The integer values are stored in Taichi fields and compared inside
    kernels, so they must stay stable.
    """

    DIFFUSE = 0
    INVALID = 1


# Plain integer tags for use inside Taichi functions
MATERIAL_DIFFUSE = int(MaterialType.DIFFUSE)
MATERIAL_INVALID = int(MaterialType.INVALID)


@ti.dataclass
class Material:
    """Device-side material.

    Attributes:
        kind: A ``MaterialType`` value.
        color: Base colour of a diffuse material, each channel in [0, 1].
            Unused by the invalid variant.
    """

    kind: ti.i32
    color: vec3


@ti.dataclass
class ScatterInformation:
    """Result of scattering a ray off a surface.

    Attributes:
        scattered: 1 if the material produced a continuation ray, 0 if the
            path was absorbed.
        attenuation: Colour factor applied to the light carried back along
            the continuation ray.
        scattered_ray: The continuation ray. Only valid if scattered == 1.
    """

    scattered: ti.i32
    attenuation: vec3
    scattered_ray: Ray


@ti.func
def invalid_material() -> Material:
    """Create the material that never scatters."""
    return Material(kind=MATERIAL_INVALID, color=vec3(0.0, 0.0, 0.0))


@ti.func
def empty_scatter() -> ScatterInformation:
    """Create a scatter result for an absorbed path."""
    return ScatterInformation(
        scattered=0,
        attenuation=vec3(0.0, 0.0, 0.0),
        scattered_ray=empty_ray(),
    )
