"""Path tracing integrator for Monte Carlo light transport.

This module traces camera rays through the scene, bouncing off surfaces
according to their material properties, and estimates the color seen along
each ray.

Key features:
    - Material dispatch through ``Material.scatter``
    - Depth-limited recursion (paths are cut off at ``max_depth`` bounces)
    - Sky gradient environment for rays that escape the scene
    - Self-intersection avoidance with a small minimum hit distance
    - Jittered supersampling for anti-aliasing

Example:
    >>> import numpy as np
    >>> from pathtracer.core.integrator import sample_pixel
    >>> rng = np.random.default_rng(7)
    >>> # color = sample_pixel(scene, camera, x, y, width, height,
    >>> #                      samples_per_pixel=100, max_depth=50, rng=rng)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color
from pathtracer.geometry.hittable import Hittable

if TYPE_CHECKING:
    from pathtracer.camera.thin_lens import Camera

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# Minimum hit distance; keeps scattered rays from re-hitting their origin
# surface because of floating-point error (shadow acne).
T_MIN = 0.001
T_MAX = math.inf

BLACK = Color(0.0, 0.0, 0.0)
HORIZON_COLOR = Color(1.0, 1.0, 1.0)
ZENITH_COLOR = Color(0.5, 0.7, 1.0)


def background(ray: Ray) -> Color:
    """Sky gradient for a ray that escaped the scene.

    Blends white at the horizon into sky blue at the zenith, driven by the
    vertical component of the normalized ray direction remapped from
    [-1, 1] to [0, 1].
    """
    unit_direction = ray.direction.unit_vector()
    t = 0.5 * (unit_direction.y + 1.0)
    return HORIZON_COLOR * (1.0 - t) + ZENITH_COLOR * t


def ray_color(ray: Ray, scene: Hittable, depth: int, rng: np.random.Generator) -> Color:
    """Estimate the color carried back along ``ray``.

    Args:
        ray: The ray to trace.
        scene: The scene (any Hittable, usually a Scene aggregate).
        depth: Remaining bounce budget. At 0 the path contributes black.
        rng: Random stream owned by the calling work item.

    Returns:
        The estimated radiance (RGB) for this path.
    """
    if depth <= 0:
        return BLACK

    rec = scene.hit(ray, T_MIN, T_MAX)
    if rec is None:
        return background(ray)

    scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        return BLACK

    return scattered.attenuation * ray_color(scattered.ray, scene, depth - 1, rng)


def sample_pixel(
    scene: Hittable,
    camera: Camera,
    x: int,
    y: int,
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    rng: np.random.Generator,
) -> Color:
    """Average ``samples_per_pixel`` jittered path samples for one pixel.

    Each sample offsets the pixel position by independent uniform [0, 1)
    amounts and maps it to viewport coordinates ``(x + dx) / (width - 1)``
    and ``(y + dy) / (height - 1)``.

    Args:
        scene: The scene to render.
        camera: The camera generating primary rays.
        x: Pixel column (0 = left).
        y: Pixel row (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of paths to average.
        max_depth: Bounce budget for each path.
        rng: Random stream owned by the calling work item.

    Returns:
        The averaged linear color of the pixel.
    """
    max_u = float(max(width - 1, 1))
    max_v = float(max(height - 1, 1))

    total = BLACK
    for _ in range(samples_per_pixel):
        s = (x + rng.random()) / max_u
        t = (y + rng.random()) / max_v
        ray = camera.get_ray(s, t, rng)
        total = total + ray_color(ray, scene, max_depth, rng)

    return total / samples_per_pixel
