#!/usr/bin/env python3
"""Render a scene of boxes and spheres with Phong shading.

Loads box and sphere records from local JSON files or URLs (by default the
course's boxes.json and spheres.json), lights them with the default white
light and casts one ray per pixel from the eye through the unit image window.

Usage:
    python -m examples.render_scene [options]

Options:
    --boxes SOURCE      Box records, path or URL (default: course boxes.json)
    --spheres SOURCE    Sphere records, path or URL (default: course spheres.json)
    --sample-scene      Render the built-in sample scene instead
    --width WIDTH       Image width in pixels (default: 512)
    --height HEIGHT     Image height in pixels (default: 512)
    --eye X Y Z         Eye position (default: 0.5 0.5 -0.5)
    --no-flip           Put image row 0 at the bottom of the window
    --shading MODE      phong or flat (default: phong)
    --output OUTPUT     Output file path (default: scene.png)
    --show              Show the result in a Matplotlib window
    --cpu               Force the Taichi CPU backend
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_scene --sample-scene --width 256 --height 256
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti

from phongtracer.scene.loader import (
    DEFAULT_BOXES_URL,
    DEFAULT_EYE,
    DEFAULT_SPHERES_URL,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render boxes and spheres with Phong shading.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--boxes",
        type=str,
        default=DEFAULT_BOXES_URL,
        help=f"Box records, file path or URL (default: {DEFAULT_BOXES_URL})",
    )
    parser.add_argument(
        "--spheres",
        type=str,
        default=DEFAULT_SPHERES_URL,
        help=f"Sphere records, file path or URL (default: {DEFAULT_SPHERES_URL})",
    )
    parser.add_argument(
        "--sample-scene",
        action="store_true",
        help="Render the built-in sample scene instead of loading records",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=512,
        help="Image width in pixels (default: 512)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=512,
        help="Image height in pixels (default: 512)",
    )
    parser.add_argument(
        "--eye",
        type=float,
        nargs=3,
        metavar=("X", "Y", "Z"),
        default=list(DEFAULT_EYE.as_tuple()),
        help="Eye position (default: 0.5 0.5 -0.5)",
    )
    parser.add_argument(
        "--no-flip",
        action="store_true",
        help="Map image row 0 to the bottom of the window",
    )
    parser.add_argument(
        "--shading",
        choices=["phong", "flat"],
        default="phong",
        help="Shading mode (default: phong)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scene.png",
        help="Output file path (default: scene.png)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Use the CPU backend even if a GPU is available",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def render_scene(
    boxes: str = DEFAULT_BOXES_URL,
    spheres: str = DEFAULT_SPHERES_URL,
    use_sample_scene: bool = False,
    width: int = 512,
    height: int = 512,
    eye: tuple[float, float, float] = DEFAULT_EYE.as_tuple(),
    flip_vertical: bool = True,
    shading: str = "phong",
    output_path: str = "scene.png",
    show: bool = False,
    quiet: bool = False,
) -> Path:
    """Load or create a scene, render it and save it to file.

    Args:
        boxes: Box records source (file path or URL).
        spheres: Sphere records source (file path or URL).
        use_sample_scene: If True, ignore boxes/spheres and use the sample scene.
        width: Image width in pixels.
        height: Image height in pixels.
        eye: Eye position.
        flip_vertical: If True, image row 0 is the top of the window.
        shading: "phong" or "flat".
        output_path: Output file path (PNG).
        show: If True, display the result with Matplotlib.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from phongtracer.core.renderer import render
    from phongtracer.core.shading import ShadingMode
    from phongtracer.preview.display import show_image
    from phongtracer.preview.export import save_png
    from phongtracer.scene.loader import build_scene, load_records
    from phongtracer.scene.model import ImageWindow, Point
    from phongtracer.scene.sample import create_sample_scene

    window = ImageWindow(flip_vertical=flip_vertical)

    if use_sample_scene:
        if not quiet:
            print("Creating sample scene...")
        scene = create_sample_scene(window, eye=Point(*eye))
    else:
        if not quiet:
            print(f"Loading boxes from {boxes}...")
        box_records = load_records(boxes)
        if not quiet:
            print(f"Loading spheres from {spheres}...")
        sphere_records = load_records(spheres)
        scene = build_scene(
            boxes=box_records,
            spheres=sphere_records,
            eye=Point(*eye),
            window=window,
        )

    if not quiet:
        print(
            f"Rendering {len(scene.boxes)} boxes and {len(scene.spheres)} spheres "
            f"at {width}x{height} ({shading} shading)..."
        )

    start_time = time.time()
    image = render(scene, width, height, shading=ShadingMode[shading.upper()])

    output_file = save_png(image, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if show:
        show_image(image, title=f"{output_file.name} - {width}x{height}")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")
    else:
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_scene(
            boxes=args.boxes,
            spheres=args.spheres,
            use_sample_scene=args.sample_scene,
            width=args.width,
            height=args.height,
            eye=tuple(args.eye),
            flip_vertical=not args.no_flip,
            shading=args.shading,
            output_path=args.output,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
