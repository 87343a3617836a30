"""Command-line interface for rendering a scene to an image file.

Usage:
    python -m pathtracer SCENE [options]

Arguments:
    SCENE               A JSON scene file, or a builtin scene name
                        (builtin.rtiow_final, builtin.three_spheres)

Options:
    -s, --save PATH     Output image path; .ppm, .bmp or .png (default: image.png)
    --workers N         Worker processes; 0 uses every CPU (default: 1)
    --seed N            Seed for scene generation and sampling
    --samples N         Override the scene's samples per pixel
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m pathtracer builtin.three_spheres -s spheres.png --workers 4 --seed 1
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from pathtracer.core.renderer import Renderer
from pathtracer.errors import PathTracerError
from pathtracer.export.writer import resolve_format
from pathtracer.scene.builtin import BUILTIN_SCENES
from pathtracer.scene.config import SceneDescription, load_scene

DEFAULT_OUTPUT = "image.png"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a scene with the CPU path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Builtin scenes: " + ", ".join(BUILTIN_SCENES),
    )
    parser.add_argument(
        "scene",
        help="Path to a JSON scene file, or the name of a builtin scene",
    )
    parser.add_argument(
        "-s",
        "--save",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output image path; the extension picks the format (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes, 0 for one per CPU (default: 1)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for scene generation and sampling (default: random)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=None,
        help="Override the scene's samples per pixel",
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
    args = parser.parse_args(argv)
    if args.workers < 0:
        parser.error("--workers must be 0 or more")
    if args.samples is not None and args.samples < 1:
        parser.error("--samples must be at least 1")
    return args


def load_description(scene: str, seed: int | None = None) -> SceneDescription:
    """Resolve a builtin scene name or load a JSON scene file."""
    factory = BUILTIN_SCENES.get(scene)
    if factory is not None:
        return factory(np.random.default_rng(seed))
    return load_scene(scene)


def render_scene(
    scene: str,
    output_path: str = DEFAULT_OUTPUT,
    workers: int = 1,
    seed: int | None = None,
    samples: int | None = None,
    quiet: bool = False,
) -> Path:
    """Load a scene, render it and save the image.

    Args:
        scene: JSON scene path or builtin scene name.
        output_path: Destination image; its extension selects the format.
        workers: Number of worker processes (0 means one per CPU).
        seed: Seed for scene generation and sampling.
        samples: Samples per pixel overriding the scene's value.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Fail on a bad extension before doing any work
    resolve_format(output_path)

    if workers == 0:
        workers = os.cpu_count() or 1

    description = load_description(scene, seed)
    settings = description.render
    if samples is not None:
        settings = dataclasses.replace(settings, samples_per_pixel=samples)

    if not quiet:
        print(
            f"Rendering {scene} ({settings.width}x{settings.height}, "
            f"{settings.samples_per_pixel} spp, {len(description.world)} objects)...",
            file=sys.stderr,
        )

    renderer = Renderer(description.world, description.build_camera(), settings, seed=seed)
    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            print(
                f"\r  Scanlines remaining: {total_rows - rows_done:5d}",
                end="",
                file=sys.stderr,
                flush=True,
            )

    output_file = renderer.render_to_file(output_path, workers=workers, callback=progress_callback)

    if not quiet:
        print(file=sys.stderr)  # Newline after progress
        print(f"Saved to: {output_file.absolute()}", file=sys.stderr)
        print(f"Total time: {time.time() - start_time:.2f}s", file=sys.stderr)

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        render_scene(
            args.scene,
            output_path=args.save,
            workers=args.workers,
            seed=args.seed,
            samples=args.samples,
            quiet=args.quiet,
        )
        return 0
    except (PathTracerError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
