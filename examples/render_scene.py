#!/usr/bin/env python3
"""Render a small hand-built scene.

This script builds a scene of three diffuse spheres on a ground sphere,
saves it as a JSON scene file, renders it with the band renderer and writes
the result as a PNG. The saved scene can be rendered again with
``bandtrace --scene``.

Usage:
    python examples/render_scene.py [options]

Options:
    --samples SAMPLES   Number of samples per pixel (default: 32)
    --threads THREADS   Number of worker processes (default: 3)
    --output OUTPUT     Output file path (default: spheres.png)
    --scene-output PATH Scene file path (default: spheres.json)
    --show              Show the result in a Matplotlib window

Example:
    python examples/render_scene.py --samples 16 --threads 4
"""

import argparse
import logging
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene of diffuse spheres.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--samples", type=int, default=32, help="Samples per pixel (default: 32)")
    parser.add_argument("--threads", type=int, default=3, help="Number of worker processes (default: 3)")
    parser.add_argument("--output", type=str, default="spheres.png", help="Output file path (default: spheres.png)")
    parser.add_argument(
        "--scene-output",
        type=str,
        default="spheres.json",
        help="Scene file path (default: spheres.json)",
    )
    parser.add_argument("--show", action="store_true", help="Show the result in a Matplotlib window")
    return parser.parse_args()


def build_scene():
    """Three spheres in a row on a large green ground sphere."""
    from bandtrace.scene.manager import EntityManager

    scene = EntityManager()
    scene.add_diffuse_sphere(center=(-2.2, 0.0, -5.0), radius=1.0, color=(0.9, 0.3, 0.3))
    scene.add_diffuse_sphere(center=(0.0, 0.0, -5.0), radius=1.0, color=(0.3, 0.9, 0.3))
    scene.add_diffuse_sphere(center=(2.2, 0.0, -5.0), radius=1.0, color=(0.3, 0.3, 0.9))
    scene.add_diffuse_sphere(center=(0.0, -101.0, -5.0), radius=100.0, color=(0.6, 0.8, 0.4))
    return scene


def render_scene(args: argparse.Namespace) -> Path:
    """Save, render and export the scene.

    Returns:
        Path to the saved image file.
    """
    from bandtrace.core.config import RenderConfig
    from bandtrace.preview.display import show_preview
    from bandtrace.preview.export import save_png
    from bandtrace.render.renderer import Renderer

    scene = build_scene()
    scene_file = scene.save(args.scene_output)
    print(f"Scene written to: {scene_file.absolute()}")

    config = RenderConfig(samples_per_pixel=args.samples, threads=args.threads)
    renderer = Renderer(config, camera_position=(0.0, 0.5, 0.0))
    for entity in scene.entities:
        renderer.add_entity(entity)

    start_time = time.time()
    frame_buffer = renderer.draw()
    total_time = time.time() - start_time

    output_file = save_png(frame_buffer, args.output)
    print(f"Saved to: {output_file.absolute()}")
    print(f"Total time: {total_time:.2f}s")

    if args.show:
        show_preview(frame_buffer)
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        render_scene(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
