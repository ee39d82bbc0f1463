#!/usr/bin/env python3
"""
Pathforge - A Python Monte Carlo Ray Tracer

Main entry point for rendering scenes.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from pathforge.errors import PathforgeError
from pathforge.image_io import save_image, write_ppm
from pathforge.log import configure_logging, get_logger
from pathforge.renderer import Renderer, RenderSettings
from pathforge.sampling import make_rng
from pathforge.scene_parser import load_scene
from pathforge.scenes import random_scene, random_scene_camera, three_spheres, three_spheres_camera

logger = get_logger('pathforge.main')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Pathforge - A Python Monte Carlo Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene final --output render.ppm
  python main.py --width 800 --samples 500 --seed 1 --output render.png
  python main.py --scene-file scenes/glass.yaml --output - > glass.ppm
        '''
    )

    parser.add_argument('--width', type=int, default=None, help='Image width (default: 384)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=None, help='Max ray depth (default: 50)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible image')
    parser.add_argument('--output', type=str, default='output/render.ppm',
                        help="Output filename, '-' for PPM on stdout")
    parser.add_argument('--scene', type=str, default='final', choices=['final', 'three'],
                        help='Built-in scene to render (default: final)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene description (overrides --scene)')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only log warnings')
    return parser


def _apply_overrides(settings: RenderSettings, args: argparse.Namespace) -> RenderSettings:
    """Return settings with any CLI values layered on top."""
    return RenderSettings(
        width=args.width if args.width is not None else settings.width,
        height=0 if args.width is not None else settings.height,
        # Keep the image shape the camera was built for
        aspect_ratio=settings.width / settings.height,
        samples_per_pixel=args.samples if args.samples is not None else settings.samples_per_pixel,
        max_depth=args.depth if args.depth is not None else settings.max_depth,
        tile_size=settings.tile_size,
        num_threads=args.threads if args.threads is not None else settings.num_threads,
        seed=args.seed if args.seed is not None else settings.seed,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(-1 if args.quiet else (1 if args.verbose else 0))

    try:
        if args.scene_file:
            world, camera, file_settings = load_scene(args.scene_file)
            settings = _apply_overrides(file_settings, args)
        else:
            settings = _apply_overrides(RenderSettings(), args)
            aspect_ratio = settings.width / settings.height
            if args.scene == 'three':
                world = three_spheres()
                camera = three_spheres_camera(aspect_ratio)
            else:
                world = random_scene(make_rng(settings.seed))
                camera = random_scene_camera(aspect_ratio)

        logger.info("Objects in scene: %d", len(world))

        renderer = Renderer(settings)
        last_progress = [-1]

        def progress_callback(progress: float):
            pct = int(progress * 100)
            if pct > last_progress[0]:
                last_progress[0] = pct
                bar_len = 40
                filled = int(bar_len * progress)
                bar = '#' * filled + '.' * (bar_len - filled)
                print(f'\rRendering: [{bar}] {pct}%', end='', file=sys.stderr, flush=True)

        if not args.quiet:
            renderer.set_progress_callback(progress_callback)

        image = renderer.render(world, camera)
        if not args.quiet:
            print(file=sys.stderr)

        if args.output == '-':
            write_ppm(image, sys.stdout)
        else:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            save_image(image, output_path)
    except PathforgeError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130

    return 0


if __name__ == '__main__':
    sys.exit(main())
