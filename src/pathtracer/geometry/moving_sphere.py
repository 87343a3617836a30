"""Sphere whose center moves linearly over time, for motion blur.

The center is interpolated between ``orig`` at ``time0`` and ``dest`` at
``time1`` and extrapolated linearly outside that interval. Rays carry the
time at which they sample the scene, so averaging many rays spread over the
camera shutter interval produces motion blur.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Point
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.sphere import hit_sphere

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


@dataclass(frozen=True)
class MovingSphere(Hittable):
    """A sphere moving from ``orig`` to ``dest`` over [time0, time1].

    Attributes:
        orig: Center of the sphere at ``time0``.
        dest: Center of the sphere at ``time1``.
        time0: Start of the motion interval.
        time1: End of the motion interval (must differ from ``time0``).
        radius: The radius of the sphere (positive).
        material: The material of the sphere.
    """

    orig: Point
    dest: Point
    time0: float
    time1: float
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        if self.time0 == self.time1:
            raise ValueError(
                f"Motion interval [{self.time0}, {self.time1}] is empty; "
                "use Sphere for a static sphere"
            )

    def center(self, time: float) -> Point:
        """Center of the sphere at ``time``, linear in ``time``."""
        fraction = (time - self.time0) / (self.time1 - self.time0)
        return self.orig + (self.dest - self.orig) * fraction

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        return hit_sphere(ray, self.center(ray.time), self.radius, self.material, t_min, t_max)
