"""Geometry module for shape primitives.

This module provides geometric primitives and intersection algorithms:

Components:
    hittable: Hit record structure and the Hittable interface
    sphere: Static sphere with ray-sphere intersection
    moving_sphere: Sphere with a linearly moving center (motion blur)

Ray-object intersection follows the pattern:
    record = primitive.hit(ray, t_min, t_max)  # HitRecord or None
"""

from .hittable import Hittable, HitRecord
from .moving_sphere import MovingSphere
from .sphere import Sphere, hit_sphere

__all__ = [
    "Hittable",
    "HitRecord",
    "Sphere",
    "MovingSphere",
    "hit_sphere",
]
