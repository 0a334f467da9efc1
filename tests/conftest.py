"""Pytest configuration for bandtrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Fast math stays off
    so that NaN roots of the sphere intersection fail their comparisons.
    """
    ti.init(arch=ti.cpu, random_seed=42, fast_math=False)
    yield


@pytest.fixture
def default_scene():
    """The built-in demo scene as an EntityManager."""
    from bandtrace.scene.default_scene import create_default_scene

    return create_default_scene()


@pytest.fixture
def default_scene_fields(default_scene):
    """The built-in demo scene uploaded into Taichi fields."""
    from bandtrace.scene.intersection import SceneFields

    fields = SceneFields()
    fields.load(default_scene)
    return fields


@pytest.fixture
def single_sphere_fields():
    """A scene holding only the pink sphere of the demo scene."""
    from bandtrace.scene.intersection import SceneFields
    from bandtrace.scene.manager import EntityManager

    manager = EntityManager()
    manager.add_diffuse_sphere(center=(0.0, 0.0, -4.0), radius=2.0, color=(1.0, 0.5, 0.5))
    fields = SceneFields()
    fields.load(manager)
    return fields


@pytest.fixture
def empty_scene_fields():
    """A scene without entities."""
    from bandtrace.scene.intersection import SceneFields

    fields = SceneFields()
    fields.clear()
    return fields
