"""Geometry: entities and ray intersection.

Components:
    hit: HitInformation record and the "no hit" time sentinel
    sphere: Ray-sphere intersection
    entity: Entity tag, device struct and intersection dispatch

All intersection routines are Taichi functions (@ti.func) meant to be inlined
into rendering kernels.
"""

from .entity import ENTITY_INVALID, ENTITY_SPHERE, Entity, EntityType, hit_entity
from .hit import MAXIMUM_TIME, HitInformation, empty_hit
from .sphere import hit_sphere, sphere_normal

__all__ = [
    "Entity",
    "EntityType",
    "ENTITY_SPHERE",
    "ENTITY_INVALID",
    "hit_entity",
    "HitInformation",
    "MAXIMUM_TIME",
    "empty_hit",
    "hit_sphere",
    "sphere_normal",
]
