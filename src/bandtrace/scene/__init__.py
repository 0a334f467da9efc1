"""Scene module: host-side scene records and device-side intersection.

Components:
    records: Frozen entity and material records with raw (JSON) decoding
    manager: EntityManager, the ordered host-side entity list
    intersection: SceneFields, the Taichi copy of a scene and its closest-hit query
    default_scene: The built-in demo scene
"""

from .default_scene import DEFAULT_CAMERA_POSITION, create_default_scene
from .intersection import MAX_ENTITIES, SceneFields
from .manager import EntityManager
from .records import (
    DiffuseInfo,
    EntityInfo,
    InvalidEntityInfo,
    InvalidMaterialInfo,
    MaterialInfo,
    SphereInfo,
    create_entity_from_raw,
    create_material_from_raw,
)

__all__ = [
    # Records
    "SphereInfo",
    "InvalidEntityInfo",
    "DiffuseInfo",
    "InvalidMaterialInfo",
    "EntityInfo",
    "MaterialInfo",
    "create_entity_from_raw",
    "create_material_from_raw",
    # Manager
    "EntityManager",
    # Intersection
    "SceneFields",
    "MAX_ENTITIES",
    # Demo scene
    "create_default_scene",
    "DEFAULT_CAMERA_POSITION",
]
