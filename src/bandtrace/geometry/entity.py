"""Scene entities.

Entities are a closed set of variants tagged by ``EntityType``. Like
materials, they are stored on the device as one flat struct carrying the
parameters of every variant.
"""

from enum import IntEnum

import taichi as ti

from bandtrace.core.ray import Ray
from bandtrace.core.vector import vec3
from bandtrace.geometry.hit import HitInformation, empty_hit
from bandtrace.geometry.sphere import hit_sphere
from bandtrace.materials.material import Material


class EntityType(IntEnum):
    """Entity variants. Values are stored in Taichi fields."""

    SPHERE = 0
    INVALID = 1


ENTITY_SPHERE = int(EntityType.SPHERE)
ENTITY_INVALID = int(EntityType.INVALID)


@ti.dataclass
class Entity:
    """Device-side entity.

    Attributes:
        kind: An ``EntityType`` value.
        center: Sphere center.
        radius: Sphere radius.
        material: Surface material.
    """

    kind: ti.i32
    center: vec3
    radius: ti.f32
    material: Material


@ti.func
def hit_entity(entity: Entity, ray: Ray, minimum_time: ti.f32, maximum_time: ti.f32) -> HitInformation:
    """Intersect a ray with an entity of any kind.

    Invalid entities are never hit.
    """
    result = empty_hit()
    if entity.kind == ENTITY_SPHERE:
        result = hit_sphere(entity.center, entity.radius, entity.material, ray, minimum_time, maximum_time)
    return result
