"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Vector type, reflection/refraction and random sampling utilities
    ray: Ray data structure
    integrator: Depth-limited path tracing and per-pixel sampling
    renderer: Scan-order rendering, sequential or across worker processes

The core module estimates the rendering equation by Monte Carlo path
tracing: each pixel averages many jittered camera paths, and every path
bounces through the scene until it escapes to the sky, is absorbed, or runs
out of depth.
"""

from .ray import Ray
from .vec3 import (
    Color,
    Point,
    Vec3,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    reflect,
    refract,
    schlick_reflectance,
)

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from pathtracer.core.integrator or pathtracer.core.renderer.

__all__ = [
    "Ray",
    "Vec3",
    "Point",
    "Color",
    "reflect",
    "refract",
    "schlick_reflectance",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
