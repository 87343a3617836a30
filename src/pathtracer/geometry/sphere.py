"""Sphere primitive with ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |ray.origin + t * ray.direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(oc, direction)  (half of traditional b)
    c = dot(oc, oc) - radius^2
    oc = origin - center

A negative discriminant ``h^2 - a*c`` means the ray misses; a zero
discriminant is a single tangential hit.

Example:
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials import Lambertian
    >>> from pathtracer.core.vec3 import Vec3
    >>> sphere = Sphere(Vec3(0, 0, -1), 0.5, Lambertian(Vec3(0.5, 0.5, 0.5)))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Point
from pathtracer.geometry.hittable import Hittable, HitRecord

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


def hit_sphere(
    ray: Ray,
    center: Point,
    radius: float,
    material: Material,
    t_min: float,
    t_max: float,
) -> HitRecord | None:
    """Test a ray against a sphere at a given center.

    The nearer root is tried first; if it falls outside [t_min, t_max] the
    farther root is tried. Both bounds are inclusive.

    Args:
        ray: The ray to test.
        center: The sphere center, already evaluated at ``ray.time``.
        radius: The sphere radius.
        material: Material recorded on a hit.
        t_min: Minimum accepted ray parameter.
        t_max: Maximum accepted ray parameter.

    Returns:
        A HitRecord for the nearest accepted root, or None on a miss.
    """
    oc = ray.origin - center
    a = ray.direction.length_squared()
    h = oc.dot(ray.direction)
    c = oc.length_squared() - radius * radius

    discriminant = h * h - a * c
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    root = (-h - sqrt_d) / a
    if root < t_min or root > t_max:
        root = (-h + sqrt_d) / a
        if root < t_min or root > t_max:
            return None

    point = ray.at(root)
    outward_normal = (point - center) / radius
    return HitRecord.from_outward_normal(ray, root, point, outward_normal, material)


@dataclass(frozen=True)
class Sphere(Hittable):
    """A static sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The material shared with any other primitive using it.
    """

    center: Point
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        return hit_sphere(ray, self.center, self.radius, self.material, t_min, t_max)
