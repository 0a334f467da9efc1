"""Tests for scene records and the EntityManager.

Tests cover:
- Record validation
- Decoding raw records, including the invalid fallbacks
- Raw snapshots and JSON scene files
"""

import json
import logging

import pytest


PINK_SPHERE_RAW = {
    "type": "Sphere",
    "center": {"x": 0.0, "y": 0.0, "z": -4.0},
    "radius": 2.0,
    "material": {"type": "Diffuse", "color": {"x": 1.0, "y": 0.5, "z": 0.5}},
}


class TestRecords:
    """Tests for the record dataclasses."""

    def test_diffuse_color_out_of_range(self):
        from bandtrace.scene.records import DiffuseInfo

        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            DiffuseInfo(color=(1.5, 0.0, 0.0))
        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            DiffuseInfo(color=(0.0, -0.1, 0.0))

    def test_diffuse_color_needs_three_components(self):
        from bandtrace.scene.records import DiffuseInfo

        with pytest.raises(ValueError, match="3 components"):
            DiffuseInfo(color=(1.0, 0.5))

    def test_zero_radius_rejected(self):
        from bandtrace.scene.records import DiffuseInfo, SphereInfo

        with pytest.raises(ValueError, match="radius"):
            SphereInfo(center=(0.0, 0.0, 0.0), radius=0.0, material=DiffuseInfo(color=(1.0, 1.0, 1.0)))

    def test_negative_radius_allowed(self):
        from bandtrace.scene.records import DiffuseInfo, SphereInfo

        sphere = SphereInfo(center=(0.0, 0.0, 0.0), radius=-1.0, material=DiffuseInfo(color=(1.0, 1.0, 1.0)))
        assert sphere.radius == -1.0

    def test_type_tags(self):
        from bandtrace.geometry.entity import EntityType
        from bandtrace.materials.material import MaterialType
        from bandtrace.scene.records import (
            DiffuseInfo,
            InvalidEntityInfo,
            InvalidMaterialInfo,
            SphereInfo,
        )

        material = DiffuseInfo(color=(0.2, 0.4, 0.6))
        assert material.material_type == MaterialType.DIFFUSE
        assert InvalidMaterialInfo().material_type == MaterialType.INVALID
        assert SphereInfo(center=(0.0, 0.0, 0.0), radius=1.0, material=material).entity_type == EntityType.SPHERE
        assert InvalidEntityInfo().entity_type == EntityType.INVALID

    def test_to_raw(self):
        from bandtrace.scene.records import DiffuseInfo, SphereInfo

        sphere = SphereInfo(center=(0, 0, -4), radius=2, material=DiffuseInfo(color=(1, 0.5, 0.5)))
        assert sphere.to_raw() == PINK_SPHERE_RAW


class TestDecoding:
    """Tests for create_entity_from_raw and create_material_from_raw."""

    def test_decode_sphere(self):
        from bandtrace.scene.records import DiffuseInfo, SphereInfo, create_entity_from_raw

        entity = create_entity_from_raw(PINK_SPHERE_RAW)
        assert entity == SphereInfo(
            center=(0.0, 0.0, -4.0), radius=2.0, material=DiffuseInfo(color=(1.0, 0.5, 0.5))
        )

    def test_unknown_entity_type_is_invalid(self, caplog):
        from bandtrace.scene.records import InvalidEntityInfo, create_entity_from_raw

        with caplog.at_level(logging.WARNING):
            entity = create_entity_from_raw({"type": "Cube", "size": 1.0})

        assert isinstance(entity, InvalidEntityInfo)
        assert "Cube" in caplog.text

    def test_zero_radius_sphere_is_invalid(self, caplog):
        from bandtrace.scene.records import InvalidEntityInfo, create_entity_from_raw

        raw = dict(PINK_SPHERE_RAW, radius=0.0)
        with caplog.at_level(logging.WARNING):
            entity = create_entity_from_raw(raw)

        assert isinstance(entity, InvalidEntityInfo)
        assert "Malformed sphere" in caplog.text

    def test_missing_center_is_invalid(self):
        from bandtrace.scene.records import InvalidEntityInfo, create_entity_from_raw

        raw = {key: value for key, value in PINK_SPHERE_RAW.items() if key != "center"}
        assert isinstance(create_entity_from_raw(raw), InvalidEntityInfo)

    @pytest.mark.parametrize("raw", [None, 42, "Sphere", []])
    def test_non_dictionary_is_invalid(self, raw):
        from bandtrace.scene.records import (
            InvalidEntityInfo,
            InvalidMaterialInfo,
            create_entity_from_raw,
            create_material_from_raw,
        )

        assert isinstance(create_entity_from_raw(raw), InvalidEntityInfo)
        assert isinstance(create_material_from_raw(raw), InvalidMaterialInfo)

    def test_bad_material_keeps_sphere_geometry(self):
        """Test that a sphere with an unknown material gets the invalid material."""
        from bandtrace.scene.records import InvalidMaterialInfo, SphereInfo, create_entity_from_raw

        raw = dict(PINK_SPHERE_RAW, material={"type": "Metal", "fuzz": 0.1})
        entity = create_entity_from_raw(raw)

        assert isinstance(entity, SphereInfo)
        assert entity.center == (0.0, 0.0, -4.0)
        assert entity.radius == 2.0
        assert isinstance(entity.material, InvalidMaterialInfo)

    def test_out_of_range_color_is_clamped(self, caplog):
        """Test that float noise or overbright colours decode to a usable material."""
        from bandtrace.scene.records import DiffuseInfo, create_material_from_raw

        raw = {"type": "Diffuse", "color": {"x": 1.0000001, "y": -0.25, "z": 0.5}}
        with caplog.at_level(logging.WARNING):
            material = create_material_from_raw(raw)

        assert material == DiffuseInfo(color=(1.0, 0.0, 0.5))
        assert "clamped" in caplog.text

    def test_in_range_color_is_not_reported(self, caplog):
        from bandtrace.scene.records import DiffuseInfo, create_material_from_raw

        with caplog.at_level(logging.WARNING):
            material = create_material_from_raw({"type": "Diffuse", "color": {"x": 1.0, "y": 0.0, "z": 0.5}})

        assert material == DiffuseInfo(color=(1.0, 0.0, 0.5))
        assert caplog.text == ""

    def test_nan_color_is_invalid_material(self, caplog):
        from bandtrace.scene.records import InvalidMaterialInfo, create_material_from_raw

        raw = {"type": "Diffuse", "color": {"x": float("nan"), "y": 0.0, "z": 0.0}}
        with caplog.at_level(logging.WARNING):
            material = create_material_from_raw(raw)

        assert isinstance(material, InvalidMaterialInfo)
        assert "Malformed diffuse material" in caplog.text

    def test_sphere_with_overbright_color_keeps_material(self):
        from bandtrace.scene.records import DiffuseInfo, SphereInfo, create_entity_from_raw

        raw = dict(PINK_SPHERE_RAW, material={"type": "Diffuse", "color": {"x": 2.0, "y": 0.5, "z": 0.5}})
        entity = create_entity_from_raw(raw)

        assert isinstance(entity, SphereInfo)
        assert entity.material == DiffuseInfo(color=(1.0, 0.5, 0.5))

    def test_invalid_records_round_trip_as_invalid(self):
        from bandtrace.scene.records import (
            InvalidEntityInfo,
            InvalidMaterialInfo,
            create_entity_from_raw,
            create_material_from_raw,
        )

        assert create_entity_from_raw(InvalidEntityInfo().to_raw()) == InvalidEntityInfo()
        assert create_material_from_raw(InvalidMaterialInfo().to_raw()) == InvalidMaterialInfo()


class TestEntityManager:
    """Tests for EntityManager."""

    def test_add_returns_index(self):
        from bandtrace.scene.manager import EntityManager
        from bandtrace.scene.records import InvalidEntityInfo

        manager = EntityManager()
        assert manager.add_diffuse_sphere(center=(0, 0, -1), radius=0.5, color=(1, 1, 1)) == 0
        assert manager.add_entity(InvalidEntityInfo()) == 1
        assert len(manager) == 2

    def test_entities_keep_insertion_order(self, default_scene):
        centers = [entity.center for entity in default_scene.entities]
        assert centers == [(0.0, 0.0, -4.0), (0.0, -102.0, -4.0)]

    def test_entities_is_read_only_snapshot(self, default_scene):
        entities = default_scene.entities
        assert isinstance(entities, tuple)
        assert len(entities) == len(default_scene)

    def test_add_diffuse_sphere_validates(self):
        from bandtrace.scene.manager import EntityManager

        manager = EntityManager()
        with pytest.raises(ValueError):
            manager.add_diffuse_sphere(center=(0, 0, 0), radius=0, color=(1, 1, 1))
        with pytest.raises(ValueError):
            manager.add_diffuse_sphere(center=(0, 0, 0), radius=1, color=(1, 1, 2))
        assert len(manager) == 0

    def test_raw_snapshot_rebuilds_equal_scene(self, default_scene):
        from bandtrace.scene.manager import EntityManager

        raw = default_scene.to_raw()
        assert len(raw["entities"]) == 2
        assert EntityManager.from_raw(raw) == default_scene

    def test_raw_snapshot_is_independent(self, default_scene):
        """Test that mutating the source after snapshotting does not leak into the copy."""
        from bandtrace.scene.manager import EntityManager

        copy = EntityManager.from_raw(default_scene.to_raw())
        default_scene.add_diffuse_sphere(center=(1, 1, 1), radius=1, color=(0, 0, 0))

        assert len(copy) == 2
        assert len(default_scene) == 3

    def test_from_raw_keeps_count_of_bad_entities(self):
        from bandtrace.scene.manager import EntityManager
        from bandtrace.scene.records import InvalidEntityInfo

        manager = EntityManager.from_raw({"entities": [PINK_SPHERE_RAW, {"type": "Torus"}]})
        assert len(manager) == 2
        assert manager.entities[1] == InvalidEntityInfo()

    @pytest.mark.parametrize("raw", [{}, {"entities": "Sphere"}, [], None])
    def test_from_raw_needs_entities_list(self, raw):
        from bandtrace.scene.manager import EntityManager

        with pytest.raises(ValueError, match="entities"):
            EntityManager.from_raw(raw)

    def test_save_and_load(self, default_scene, tmp_path):
        from bandtrace.scene.manager import EntityManager

        path = default_scene.save(tmp_path / "scenes" / "demo.json")

        assert path.exists()
        assert json.loads(path.read_text())["entities"][0] == PINK_SPHERE_RAW
        assert EntityManager.load(path) == default_scene

    def test_load_missing_file(self, tmp_path):
        from bandtrace.scene.manager import EntityManager

        with pytest.raises(FileNotFoundError):
            EntityManager.load(tmp_path / "missing.json")


class TestDefaultScene:
    """Tests for the built-in demo scene."""

    def test_default_scene(self, default_scene):
        from bandtrace.scene.records import DiffuseInfo, SphereInfo

        assert default_scene.entities == (
            SphereInfo(center=(0.0, 0.0, -4.0), radius=2.0, material=DiffuseInfo(color=(1.0, 0.5, 0.5))),
            SphereInfo(center=(0.0, -102.0, -4.0), radius=100.0, material=DiffuseInfo(color=(0.5, 0.5, 1.0))),
        )
