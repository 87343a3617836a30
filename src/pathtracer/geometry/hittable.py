"""Hit records and the intersectable primitive interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Point, Vec3

if TYPE_CHECKING:
    from pathtracer.materials.material import Material


@dataclass(frozen=True)
class HitRecord:
    """Record of a ray-primitive intersection.

    Attributes:
        point: The 3D point where the ray met the surface.
        normal: Unit surface normal, always pointing against the incoming ray.
        t: The ray parameter at the intersection.
        is_front_face: True if the ray arrived from outside the surface. When
            False the stored normal is the negated outward normal.
        material: The material of the primitive that was hit.
    """

    point: Point
    normal: Vec3
    t: float
    is_front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Point,
        outward_normal: Vec3,
        material: Material,
    ) -> HitRecord:
        """Build a record, flipping the normal to oppose the ray if needed.

        Args:
            ray: The incoming ray.
            t: The ray parameter at the intersection.
            point: The intersection point.
            outward_normal: Unit normal pointing out of the primitive.
            material: The primitive's material.

        Returns:
            A HitRecord with ``is_front_face`` set from the sign of
            ``ray.direction . outward_normal``.
        """
        front_face = ray.direction.dot(outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, is_front_face=front_face, material=material)


class Hittable(ABC):
    """A primitive that can be intersected by a ray."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the nearest intersection with ``t`` in [t_min, t_max], if any."""
