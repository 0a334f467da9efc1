"""Command-line entry point.

Renders a scene with the band renderer and saves it as a PNG.

Usage:
    bandtrace [options]

Options:
    --width WIDTH             Image width in pixels (default: 640)
    --height HEIGHT           Image height in pixels (default: 360)
    --samples SAMPLES         Samples per pixel (default: 100)
    --bounces BOUNCES         Maximum ray segments per path (default: 50)
    --threads THREADS         Number of worker processes (default: 3)
    --viewport-height HEIGHT  Viewport height in world units (default: 2.0)
    --camera X Y Z            Camera position (default: 0 0 0)
    --scene PATH              JSON scene file (default: built-in demo scene)
    --output OUTPUT           Output file path (default: render.png)
    --seed SEED               Base random seed (default: random)
    --show                    Show the result in a Matplotlib window
    --quiet                   Suppress progress output

Example:
    bandtrace --width 320 --height 180 --samples 16 --output preview.png
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from bandtrace.core.config import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_MAX_BOUNCES_PER_RAY,
    DEFAULT_SAMPLES_PER_PIXEL,
    DEFAULT_THREADS,
    DEFAULT_VIEWPORT_HEIGHT,
    RenderConfig,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bandtrace",
        description="Render a scene of spheres with parallel band workers.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_CANVAS_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_CANVAS_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_CANVAS_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_CANVAS_HEIGHT})",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES_PER_PIXEL,
        help=f"Samples per pixel (default: {DEFAULT_SAMPLES_PER_PIXEL})",
    )
    parser.add_argument(
        "--bounces",
        type=int,
        default=DEFAULT_MAX_BOUNCES_PER_RAY,
        help=f"Maximum ray segments per path (default: {DEFAULT_MAX_BOUNCES_PER_RAY})",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=DEFAULT_THREADS,
        help=f"Number of worker processes (default: {DEFAULT_THREADS})",
    )
    parser.add_argument(
        "--viewport-height",
        type=float,
        default=DEFAULT_VIEWPORT_HEIGHT,
        help=f"Viewport height in world units (default: {DEFAULT_VIEWPORT_HEIGHT})",
    )
    parser.add_argument(
        "--camera",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=None,
        help="Camera position (default: 0 0 0)",
    )
    parser.add_argument(
        "--scene",
        type=Path,
        default=None,
        help="JSON scene file (default: built-in demo scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base random seed; worker i uses seed + i (default: random)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser


def render(args: argparse.Namespace) -> Path:
    """Render according to parsed arguments and save the PNG.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If the arguments form an invalid configuration or scene.
        FileNotFoundError: If the scene file does not exist.
    """
    # Lazy imports so that --help does not pay for Taichi
    from bandtrace.preview.display import show_preview
    from bandtrace.preview.export import save_png
    from bandtrace.render.renderer import Renderer
    from bandtrace.scene.default_scene import DEFAULT_CAMERA_POSITION, create_default_scene
    from bandtrace.scene.manager import EntityManager

    config = RenderConfig(
        canvas_width=args.width,
        canvas_height=args.height,
        max_bounces_per_ray=args.bounces,
        samples_per_pixel=args.samples,
        viewport_height=args.viewport_height,
        threads=args.threads,
        seed=args.seed,
    )

    scene = EntityManager.load(args.scene) if args.scene is not None else create_default_scene()
    camera_position = tuple(args.camera) if args.camera is not None else DEFAULT_CAMERA_POSITION

    renderer = Renderer(config, camera_position=camera_position)
    for entity in scene.entities:
        renderer.add_entity(entity)

    start_time = time.time()
    frame_buffer = renderer.draw()
    total_time = time.time() - start_time

    output_file = save_png(frame_buffer, args.output)
    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if args.show:
        show_preview(frame_buffer)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
