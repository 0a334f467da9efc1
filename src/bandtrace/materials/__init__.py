"""Material models.

Components:
    material: Material tag, device struct and scatter result
    diffuse: Diffuse reflection around the surface normal
    scatter: Dispatch from a hit's material tag to its scatter model

Only the diffuse material scatters. The invalid material absorbs every ray,
which renders as black.
"""

from .diffuse import diffuse_direction, scatter_diffuse
from .material import (
    MATERIAL_DIFFUSE,
    MATERIAL_INVALID,
    Material,
    MaterialType,
    ScatterInformation,
    empty_scatter,
    invalid_material,
)
from .scatter import scatter

__all__ = [
    "MATERIAL_DIFFUSE",
    "MATERIAL_INVALID",
    "Material",
    "MaterialType",
    "ScatterInformation",
    "invalid_material",
    "empty_scatter",
    "diffuse_direction",
    "scatter_diffuse",
    "scatter",
]
