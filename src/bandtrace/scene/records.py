"""Host-side entity and material records.

These frozen dataclasses describe a scene on the host. They are what the
orchestrator builds, what gets copied into every worker as a raw dictionary,
and what ``SceneFields`` uploads into Taichi fields.

Raw form (the JSON scene file format)::

    {
        "type": "Sphere",
        "center": {"x": 0.0, "y": 0.0, "z": -4.0},
        "radius": 2.0,
        "material": {"type": "Diffuse", "color": {"x": 1.0, "y": 0.5, "z": 0.5}},
    }

Decoding never fails: an unknown ``type`` or a malformed record decodes to
the invalid variant and logs a warning. Diffuse colour components outside
[0, 1] are clamped into range, with a warning, rather than treated as malformed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from bandtrace.geometry.entity import EntityType
from bandtrace.materials.material import MaterialType

logger = logging.getLogger(__name__)

Vector = tuple[float, float, float]

SPHERE_TYPE_NAME = "Sphere"
DIFFUSE_TYPE_NAME = "Diffuse"


def vector_to_raw(vector: Vector) -> dict[str, float]:
    """Convert an (x, y, z) tuple to its raw dictionary form."""
    return {"x": float(vector[0]), "y": float(vector[1]), "z": float(vector[2])}


def vector_from_raw(raw: dict[str, Any]) -> Vector:
    """Convert a raw ``{"x", "y", "z"}`` dictionary to a tuple.

    Raises:
        KeyError: If a component is missing.
        TypeError: If ``raw`` is not a mapping.
        ValueError: If a component is not a number.
    """
    return (float(raw["x"]), float(raw["y"]), float(raw["z"]))


def clamp_color(color: Vector) -> Vector:
    """Clamp every colour component into [0, 1]. NaN components stay NaN."""
    return tuple(min(max(c, 0.0), 1.0) for c in color)


# =============================================================================
# Materials
# =============================================================================


@dataclass(frozen=True)
class DiffuseInfo:
    """A diffuse material.

    Attributes:
        color: Base colour as (R, G, B), each component in [0, 1].
    """

    color: Vector
    material_type: MaterialType = field(default=MaterialType.DIFFUSE, init=False)

    def __post_init__(self) -> None:
        if len(self.color) != 3:
            raise ValueError(f"Diffuse color must have 3 components, got {self.color}")
        if not all(0.0 <= c <= 1.0 for c in self.color):
            raise ValueError(f"Diffuse color components must be in [0, 1], got {self.color}")

    def to_raw(self) -> dict[str, Any]:
        return {"type": DIFFUSE_TYPE_NAME, "color": vector_to_raw(self.color)}


@dataclass(frozen=True)
class InvalidMaterialInfo:
    """A material that absorbs every ray."""

    material_type: MaterialType = field(default=MaterialType.INVALID, init=False)

    def to_raw(self) -> dict[str, Any]:
        return {"type": "Invalid"}


MaterialInfo = DiffuseInfo | InvalidMaterialInfo


def create_material_from_raw(raw: Any) -> MaterialInfo:
    """Decode a raw material record.

    Args:
        raw: A dictionary in the raw material form.

    Returns:
        A DiffuseInfo, or an InvalidMaterialInfo for unknown or malformed
        records.
    """
    material_type = raw.get("type") if isinstance(raw, dict) else None

    if material_type == DIFFUSE_TYPE_NAME:
        try:
            color = vector_from_raw(raw["color"])
            clamped = clamp_color(color)
            if clamped != color:
                logger.warning("Diffuse color %s clamped to %s", color, clamped)
            return DiffuseInfo(color=clamped)
        except (KeyError, TypeError, ValueError) as error:
            logger.warning("Malformed diffuse material %r: %s", raw, error)
            return InvalidMaterialInfo()

    logger.warning("Unknown material type %r, using invalid material", material_type)
    return InvalidMaterialInfo()


# =============================================================================
# Entities
# =============================================================================


@dataclass(frozen=True)
class SphereInfo:
    """A sphere.

    Attributes:
        center: Center of the sphere as (x, y, z).
        radius: Radius of the sphere. Cannot be 0.
        material: Surface material.
    """

    center: Vector
    radius: float
    material: MaterialInfo
    entity_type: EntityType = field(default=EntityType.SPHERE, init=False)

    def __post_init__(self) -> None:
        if len(self.center) != 3:
            raise ValueError(f"Sphere center must have 3 components, got {self.center}")
        if self.radius == 0:
            raise ValueError("Sphere radius cannot be 0")

    def to_raw(self) -> dict[str, Any]:
        return {
            "type": SPHERE_TYPE_NAME,
            "center": vector_to_raw(self.center),
            "radius": float(self.radius),
            "material": self.material.to_raw(),
        }


@dataclass(frozen=True)
class InvalidEntityInfo:
    """An entity that is never hit."""

    entity_type: EntityType = field(default=EntityType.INVALID, init=False)

    def to_raw(self) -> dict[str, Any]:
        return {"type": "Invalid"}


EntityInfo = SphereInfo | InvalidEntityInfo


def create_entity_from_raw(raw: Any) -> EntityInfo:
    """Decode a raw entity record.

    Args:
        raw: A dictionary in the raw entity form.

    Returns:
        A SphereInfo, or an InvalidEntityInfo for unknown or malformed records.
        A sphere with a malformed material keeps its geometry and gets the
        invalid material.
    """
    entity_type = raw.get("type") if isinstance(raw, dict) else None

    if entity_type == SPHERE_TYPE_NAME:
        try:
            return SphereInfo(
                center=vector_from_raw(raw["center"]),
                radius=float(raw["radius"]),
                material=create_material_from_raw(raw.get("material")),
            )
        except (KeyError, TypeError, ValueError) as error:
            logger.warning("Malformed sphere %r: %s", raw, error)
            return InvalidEntityInfo()

    logger.warning("Unknown entity type %r, using invalid entity", entity_type)
    return InvalidEntityInfo()
