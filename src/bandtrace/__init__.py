"""Taichi path tracer that renders a scene of spheres in parallel bands.

The canvas is split into horizontal bands. Each band is rendered by its own
worker process, which reports progress and finally returns its linear-space
pixels. The Renderer merges the bands into a FrameBuffer, converting them to
sRGB bytes.

Subpackages:
    core: Vector algebra, rays, configuration and the path tracer
    geometry: Entities and ray intersection
    materials: Material models and scattering
    scene: Host-side scene records and the device-side scene
    render: Canvas partitioning, worker messages, workers and the Renderer
    preview: FrameBuffer, colour conversion, PNG export and matplotlib preview

Example:
    >>> from bandtrace.core.config import RenderConfig
    >>> from bandtrace.render import Renderer
    >>> from bandtrace.scene import create_default_scene
    >>>
    >>> renderer = Renderer(RenderConfig(samples_per_pixel=16))
    >>> for entity in create_default_scene().entities:
    ...     renderer.add_entity(entity)
    >>> frame_buffer = renderer.draw()
"""

__version__ = "0.1.0"
