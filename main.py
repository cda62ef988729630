#!/usr/bin/env python3
"""
spherecast - A Python Ray Tracing Renderer

Headless front end: starts a background render, polls it the way a display
loop would, and writes the finished (or partial) image to disk.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from spherecast.vec3 import Point3
from spherecast.scenes import default_scene, default_camera_settings
from spherecast.scene_parser import load_scene, SceneParseError
from spherecast.session import RenderSession
from spherecast.export import save_image

# How often the front end polls the session
POLL_INTERVAL = 1.0 / 30.0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='spherecast - A Python Ray Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output render.png
  python main.py --width 800 --samples 50 --depth 20 --output hd_render.ppm
  python main.py --scene scenes/showcase.yaml --no-reflections --output flat.png
        '''
    )

    parser.add_argument('--scene', type=str, default=None,
                        help='Scene file (JSON or YAML); default: built-in showcase')
    parser.add_argument('--width', type=int, default=None, help='Image width')
    parser.add_argument('--aspect', type=float, default=None, help='Aspect ratio (width / height)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel')
    parser.add_argument('--depth', type=int, default=None, help='Max ray depth')
    parser.add_argument('--fov', type=float, default=None, help='Vertical field of view (degrees)')
    parser.add_argument('--look-from', type=float, nargs=3, default=None, metavar=('X', 'Y', 'Z'))
    parser.add_argument('--look-at', type=float, nargs=3, default=None, metavar=('X', 'Y', 'Z'))
    parser.add_argument('--defocus-angle', type=float, default=None, help='Defocus angle (degrees)')
    parser.add_argument('--focus-dist', type=float, default=None, help='Focus distance')
    parser.add_argument('--no-antialiasing', action='store_true', help='One sample through each pixel center')
    parser.add_argument('--no-shadows', action='store_true', help='Render every surface black')
    parser.add_argument('--no-reflections', action='store_true', help='Disable reflected bounces')
    parser.add_argument('--no-refractions', action='store_true', help='Disable refracted bounces')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename (.ppm or any Pillow format)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser


def apply_overrides(settings, args) -> None:
    """Copy explicitly given command line values onto camera settings."""
    overrides = {
        'image_width': args.width,
        'aspect_ratio': args.aspect,
        'samples_per_pixel': args.samples,
        'max_depth': args.depth,
        'vfov': args.fov,
        'defocus_angle': args.defocus_angle,
        'focus_dist': args.focus_dist,
    }
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)

    if args.look_from is not None:
        settings.look_from = Point3(*args.look_from)
    if args.look_at is not None:
        settings.look_at = Point3(*args.look_at)

    # Flags only switch features off; scene-file toggles survive otherwise
    if args.no_antialiasing:
        settings.enable_antialiasing = False
    if args.no_shadows:
        settings.enable_shadows = False
    if args.no_reflections:
        settings.enable_reflections = False
    if args.no_refractions:
        settings.enable_refractions = False


def main():
    """Main entry point."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    if args.scene:
        try:
            world, settings = load_scene(args.scene)
        except SceneParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    else:
        world, settings = default_scene(), default_camera_settings()

    apply_overrides(settings, args)

    print("=" * 60)
    print("spherecast Ray Tracer")
    print("=" * 60)
    print(f"  Resolution: {settings.image_width}x{settings.image_height}")
    print(f"  Samples: {settings.samples_per_pixel if settings.enable_antialiasing else 1}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Objects in scene: {len(world)}")

    with RenderSession(settings) as session:
        session.begin_render(world)
        try:
            while session.is_rendering:
                time.sleep(POLL_INTERVAL)
                if session.consume_update() is None:
                    continue
                progress = session.progress
                bar_len = 40
                filled = int(bar_len * progress)
                bar = '█' * filled + '░' * (bar_len - filled)
                remaining = session.estimated_remaining
                eta = f" ~{remaining:.1f}s left" if remaining is not None else ""
                print(f'\rRendering: [{bar}] {int(progress * 100)}%{eta}   ', end='', flush=True)
        except KeyboardInterrupt:
            print("\nStopping render...")
            session.request_cancel()
        session.wait()

        status = session.get_status()
        print(f"\nRender {status['status']} in {status['elapsed']:.2f} seconds")
        if status['error']:
            print(f"Render error: {status['error']}", file=sys.stderr)

        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        print(f"Saving to: {output_path}")
        save_image(session.buffer, output_path)

    print("\nDone!")
    return 0 if status['error'] is None else 1


if __name__ == '__main__':
    sys.exit(main())
