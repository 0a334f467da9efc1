"""Built-in demo scene: a pink diffuse sphere resting on a large blue one."""

from bandtrace.scene.manager import EntityManager

# The camera sits at the origin looking down -z
DEFAULT_CAMERA_POSITION = (0.0, 0.0, 0.0)


def create_default_scene() -> EntityManager:
    """Build the demo scene.

    Returns:
        An EntityManager with a sphere of radius 2 at (0, 0, -4) and a ground
        sphere of radius 100 at (0, -102, -4).
    """
    scene = EntityManager()
    scene.add_diffuse_sphere(center=(0.0, 0.0, -4.0), radius=2.0, color=(1.0, 0.5, 0.5))
    scene.add_diffuse_sphere(center=(0.0, -102.0, -4.0), radius=100.0, color=(0.5, 0.5, 1.0))
    return scene
