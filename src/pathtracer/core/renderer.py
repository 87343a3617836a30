"""Scan-order renderer with optional multi-process row rendering.

This module drives the integrator over a whole image:
- Rows are traversed from the top of the image (y = height - 1) to the
  bottom, and pixels left to right within a row
- Every row owns an independent random stream derived from one seed, so a
  render is reproducible and identical whether it runs sequentially or on
  several worker processes
- Progress callbacks report finished rows for CLI or UI updates

Example:
    >>> from pathtracer.core.renderer import Renderer
    >>> from pathtracer.scene.builtin import three_spheres
    >>>
    >>> description = three_spheres()
    >>> renderer = Renderer(
    ...     description.world,
    ...     description.camera.build(description.render.aspect_ratio),
    ...     description.render,
    ...     seed=7,
    ... )
    >>> image = renderer.render(workers=4)  # (height, width, 3) float64
"""

from __future__ import annotations

import logging
import multiprocessing as mp
import time
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

from pathtracer.core.integrator import sample_pixel
from pathtracer.core.vec3 import Color
from pathtracer.export.writer import resolve_format, save_image
from pathtracer.geometry.hittable import Hittable

if TYPE_CHECKING:
    from pathtracer.camera.thin_lens import Camera
    from pathtracer.scene.config import RenderSettings

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Scene, camera and settings shared by the rows a worker process renders
_worker_state: dict[str, Any] = {}


def render_row(
    scene: Hittable,
    camera: Camera,
    settings: RenderSettings,
    y: int,
    rng: np.random.Generator,
) -> Iterator[Color]:
    """Yield the averaged colors of image row ``y``, left to right.

    Args:
        scene: The scene to render.
        camera: The camera generating primary rays.
        settings: Image size and sampling parameters.
        y: Row index in viewport orientation (0 = bottom row).
        rng: Random stream owned by this row.
    """
    for x in range(settings.width):
        yield sample_pixel(
            scene,
            camera,
            x,
            y,
            settings.width,
            settings.height,
            settings.samples_per_pixel,
            settings.max_depth,
            rng,
        )


def _init_worker(scene: Hittable, camera: Camera, settings: RenderSettings) -> None:
    _worker_state["scene"] = scene
    _worker_state["camera"] = camera
    _worker_state["settings"] = settings


def _render_row_job(job: tuple[int, np.random.SeedSequence]) -> tuple[int, npt.NDArray[np.float64]]:
    """Worker entry point: render one row and return it with its index."""
    index, seed_seq = job
    settings = _worker_state["settings"]
    y = settings.height - 1 - index
    colors = render_row(
        _worker_state["scene"],
        _worker_state["camera"],
        settings,
        y,
        np.random.default_rng(seed_seq),
    )
    return index, np.array([tuple(c) for c in colors], dtype=np.float64)


class Renderer:
    """Renders a scene through a camera into a linear color framebuffer.

    The framebuffer is a float64 array of shape (height, width, 3) whose row
    0 is the top of the image, ready for ``pathtracer.export``.

    Attributes:
        scene: The scene to render.
        camera: The camera generating primary rays.
        settings: Image size, samples per pixel and bounce depth.
        seed: Seed entropy of the render. Generated from the OS when not
            given, and kept so repeated renders reproduce the same image.
    """

    def __init__(
        self,
        scene: Hittable,
        camera: Camera,
        settings: RenderSettings,
        seed: int | None = None,
    ) -> None:
        self.scene = scene
        self.camera = camera
        self.settings = settings
        self._seed_sequence = np.random.SeedSequence(seed)
        self.seed = self._seed_sequence.entropy

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    def _row_seeds(self) -> list[np.random.SeedSequence]:
        """One child seed per row, indexed in scan order (top row first)."""
        return [
            np.random.SeedSequence(self._seed_sequence.entropy, spawn_key=(index,))
            for index in range(self.height)
        ]

    def iter_pixels(self) -> Iterator[Color]:
        """Lazily render every pixel in scan order, sequentially.

        Yields:
            Averaged linear colors, top row first, left to right.
        """
        for index, seed_seq in enumerate(self._row_seeds()):
            y = self.height - 1 - index
            yield from render_row(
                self.scene, self.camera, self.settings, y, np.random.default_rng(seed_seq)
            )

    def render(
        self,
        workers: int = 1,
        callback: ProgressCallback | None = None,
    ) -> npt.NDArray[np.float64]:
        """Render the full image.

        Args:
            workers: Number of processes. 1 renders in this process.
            callback: Optional function called after each finished row with
                (rows_done, total_rows).

        Returns:
            Linear colors of shape (height, width, 3), top row first.

        Raises:
            ValueError: If ``workers`` is less than 1.
        """
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")

        framebuffer = np.zeros((self.height, self.width, 3), dtype=np.float64)
        total_rows = self.height

        logger.info(
            "Rendering %dx%d, %d samples per pixel, max depth %d, %d worker(s)",
            self.width,
            self.height,
            self.settings.samples_per_pixel,
            self.settings.max_depth,
            workers,
        )
        start = time.perf_counter()

        if workers == 1:
            rows_done = 0
            for index, seed_seq in enumerate(self._row_seeds()):
                y = self.height - 1 - index
                colors = render_row(
                    self.scene, self.camera, self.settings, y, np.random.default_rng(seed_seq)
                )
                for x, color in enumerate(colors):
                    framebuffer[index, x] = tuple(color)
                rows_done += 1
                logger.debug("Row %d done (%d remaining)", y, total_rows - rows_done)
                if callback is not None:
                    callback(rows_done, total_rows)
        else:
            jobs = list(enumerate(self._row_seeds()))
            with mp.Pool(
                workers,
                initializer=_init_worker,
                initargs=(self.scene, self.camera, self.settings),
            ) as pool:
                for rows_done, (index, row) in enumerate(
                    pool.imap_unordered(_render_row_job, jobs), start=1
                ):
                    framebuffer[index] = row
                    logger.debug("Row %d done (%d remaining)", index, total_rows - rows_done)
                    if callback is not None:
                        callback(rows_done, total_rows)

        logger.info("Render finished in %.2fs", time.perf_counter() - start)
        return framebuffer

    def render_to_file(
        self,
        path: str | Path,
        workers: int = 1,
        callback: ProgressCallback | None = None,
    ) -> Path:
        """Render and write the image, choosing the format from ``path``.

        The format is resolved before any rendering work starts.

        Raises:
            UnsupportedFormatError: If the extension is not supported.
        """
        image_format = resolve_format(path)
        image = self.render(workers=workers, callback=callback)
        return save_image(path, image, image_format)

    def __repr__(self) -> str:
        return (
            f"Renderer({self.width}x{self.height}, "
            f"spp={self.settings.samples_per_pixel}, depth={self.settings.max_depth})"
        )
