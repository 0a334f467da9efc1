"""Entity manager: the host-side scene.

The EntityManager is an ordered list of entity records. It is built by the
orchestrator, snapshotted to a raw dictionary for every worker, and rebuilt
from that dictionary inside the worker.

Example:
    >>> from bandtrace.scene.manager import EntityManager
    >>> scene = EntityManager()
    >>> scene.add_diffuse_sphere(center=(0, 0, -4), radius=2, color=(1, 0.5, 0.5))
    0
    >>> EntityManager.from_raw(scene.to_raw()) == scene
    True
"""

import json
import logging
from pathlib import Path
from typing import Any

from bandtrace.scene.records import (
    DiffuseInfo,
    EntityInfo,
    SphereInfo,
    Vector,
    create_entity_from_raw,
)

logger = logging.getLogger(__name__)


class EntityManager:
    """An ordered collection of entities.

    Entities are tested for intersection in insertion order. Adding is the
    only mutation; a scene is not edited once rendering has started.

    Attributes:
        entities: The entity records, in insertion order.
    """

    def __init__(self, entities: list[EntityInfo] | None = None) -> None:
        self._entities: list[EntityInfo] = list(entities) if entities else []

    @property
    def entities(self) -> tuple[EntityInfo, ...]:
        return tuple(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityManager):
            return NotImplemented
        return self._entities == other._entities

    def add_entity(self, entity: EntityInfo) -> int:
        """Append an entity.

        Args:
            entity: The entity record to add.

        Returns:
            The index of the added entity.
        """
        self._entities.append(entity)
        return len(self._entities) - 1

    def add_diffuse_sphere(self, center: Vector, radius: float, color: Vector) -> int:
        """Add a sphere with a diffuse material in one call.

        Raises:
            ValueError: If the radius is 0 or a colour component is outside [0, 1].
        """
        material = DiffuseInfo(color=tuple(float(c) for c in color))
        sphere = SphereInfo(
            center=tuple(float(c) for c in center),
            radius=float(radius),
            material=material,
        )
        return self.add_entity(sphere)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_raw(self) -> dict[str, Any]:
        """Snapshot the scene to a plain dictionary (the JSON scene format)."""
        return {"entities": [entity.to_raw() for entity in self._entities]}

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "EntityManager":
        """Rebuild a scene from its raw dictionary.

        Unknown or malformed entities become invalid entities, so the entity
        count always matches the raw list.

        Raises:
            ValueError: If ``raw`` has no ``entities`` list.
        """
        raw_entities = raw.get("entities") if isinstance(raw, dict) else None
        if not isinstance(raw_entities, list):
            raise ValueError("Scene must be a dictionary with an 'entities' list")

        manager = cls()
        for raw_entity in raw_entities:
            manager.add_entity(create_entity_from_raw(raw_entity))
        return manager

    def save(self, filepath: str | Path) -> Path:
        """Write the scene to a JSON file.

        Returns:
            The path the scene was written to.
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(json.dumps(self.to_raw(), indent=2))
        logger.info("Saved scene with %d entities to %s", len(self), filepath)
        return filepath

    @classmethod
    def load(cls, filepath: str | Path) -> "EntityManager":
        """Read a scene from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the JSON has no ``entities`` list.
        """
        filepath = Path(filepath)
        manager = cls.from_raw(json.loads(filepath.read_text()))
        logger.info("Loaded scene with %d entities from %s", len(manager), filepath)
        return manager
