"""Scene-level ray intersection.

``SceneFields`` uploads an EntityManager into Taichi fields and provides the
closest-hit query used by the path tracer. Entities are kept in a
Structure-of-Arrays layout and scanned linearly in insertion order.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, fast_math=False)
    >>> from bandtrace.scene.default_scene import create_default_scene
    >>> from bandtrace.scene.intersection import SceneFields
    >>> scene = SceneFields()
    >>> scene.load(create_default_scene())
    >>> # Within a Taichi kernel: info = scene.hit(ray, 0.001, MAXIMUM_TIME)
"""

import logging

import taichi as ti

from bandtrace.core.ray import Ray
from bandtrace.geometry.entity import ENTITY_INVALID, ENTITY_SPHERE, Entity, hit_entity
from bandtrace.geometry.hit import MAXIMUM_TIME, HitInformation, empty_hit
from bandtrace.materials.material import MATERIAL_DIFFUSE, MATERIAL_INVALID, Material
from bandtrace.scene.manager import EntityManager
from bandtrace.scene.records import DiffuseInfo, EntityInfo, MaterialInfo, SphereInfo

logger = logging.getLogger(__name__)

# Maximum number of entities a scene can hold
MAX_ENTITIES = 1024


@ti.data_oriented
class SceneFields:
    """Device-side copy of a scene.

    Fields are allocated on construction, so Taichi must already be
    initialized.

    Attributes:
        capacity: Maximum number of entities.
        entity_kinds: EntityType of every entity.
        centers: Sphere centers.
        radii: Sphere radii.
        material_kinds: MaterialType of every entity's material.
        material_colors: Diffuse colours.
        count: Number of entities loaded (0-d field).
    """

    def __init__(self, capacity: int = MAX_ENTITIES) -> None:
        self.capacity = capacity

        # Structure of Arrays layout
        self.entity_kinds = ti.field(dtype=ti.i32, shape=capacity)
        self.centers = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self.radii = ti.field(dtype=ti.f32, shape=capacity)
        self.material_kinds = ti.field(dtype=ti.i32, shape=capacity)
        self.material_colors = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self.count = ti.field(dtype=ti.i32, shape=())

    def clear(self) -> None:
        """Remove all entities. Field data is overwritten by the next load."""
        self.count[None] = 0

    def load(self, manager: EntityManager) -> None:
        """Replace the scene with the entities of an EntityManager.

        Args:
            manager: The host-side scene.

        Raises:
            RuntimeError: If the scene holds more than ``capacity`` entities.
        """
        if len(manager) > self.capacity:
            raise RuntimeError(f"Maximum number of entities ({self.capacity}) exceeded: {len(manager)}")

        for index, entity in enumerate(manager.entities):
            self._store_entity(index, entity)
        self.count[None] = len(manager)
        logger.debug("Uploaded %d entities", len(manager))

    def get_count(self) -> int:
        return int(self.count[None])

    def _store_entity(self, index: int, entity: EntityInfo) -> None:
        if isinstance(entity, SphereInfo):
            self.entity_kinds[index] = ENTITY_SPHERE
            self.centers[index] = entity.center
            self.radii[index] = entity.radius
            self._store_material(index, entity.material)
        else:
            self.entity_kinds[index] = ENTITY_INVALID
            self.centers[index] = (0.0, 0.0, 0.0)
            self.radii[index] = 0.0
            self._store_material(index, None)

    def _store_material(self, index: int, material: MaterialInfo | None) -> None:
        if isinstance(material, DiffuseInfo):
            self.material_kinds[index] = MATERIAL_DIFFUSE
            self.material_colors[index] = material.color
        else:
            self.material_kinds[index] = MATERIAL_INVALID
            self.material_colors[index] = (0.0, 0.0, 0.0)

    @ti.func
    def get_entity(self, index: ti.i32) -> Entity:
        """Assemble the Entity struct stored at an index."""
        return Entity(
            kind=self.entity_kinds[index],
            center=self.centers[index],
            radius=self.radii[index],
            material=Material(kind=self.material_kinds[index], color=self.material_colors[index]),
        )

    @ti.func
    def hit(self, ray: Ray, minimum_time: ti.f32, maximum_time: ti.f32) -> HitInformation:
        """Find the closest entity hit by a ray.

        Every entity is tested with the full time range. A hit replaces the
        current one only if its time is strictly lower, so on ties the entity
        added first wins.

        Args:
            ray: The ray to test.
            minimum_time: Smallest accepted ray time.
            maximum_time: Largest accepted ray time.

        Returns:
            The HitInformation of the closest hit, or the empty hit.
        """
        result = empty_hit()
        lowest = MAXIMUM_TIME

        for index in range(self.count[None]):
            information = hit_entity(self.get_entity(index), ray, minimum_time, maximum_time)
            if information.hit == 1 and information.time < lowest:
                lowest = information.time
                result = information

        return result
