"""Hit information returned by every intersection routine."""

import taichi as ti

from bandtrace.core.vector import vec3
from bandtrace.materials.material import Material, invalid_material

# Largest integer a double holds exactly. Acts as "no hit yet" for ray times.
MAXIMUM_TIME = 9007199254740991.0


@ti.dataclass
class HitInformation:
    """Record of a ray-surface intersection.

    Attributes:
        hit: 1 if the ray hit a surface within the time range, 0 otherwise.
        position: The point where the ray hit the surface.
        time: The ray parameter at the hit.
        normal: The surface normal at the hit, Chebyshev-normalized and
            flipped so that it opposes the incoming ray.
        outward_face: 1 if the ray hit the outside of the surface, 0 if it
            hit the inside.
        material: The material of the surface that was hit.
    """

    hit: ti.i32
    position: vec3
    time: ti.f32
    normal: vec3
    outward_face: ti.i32
    material: Material


@ti.func
def empty_hit() -> HitInformation:
    """Create the hit information of a miss."""
    return HitInformation(
        hit=0,
        position=vec3(0.0, 0.0, 0.0),
        time=0.0,
        normal=vec3(0.0, 0.0, 0.0),
        outward_face=0,
        material=invalid_material(),
    )
