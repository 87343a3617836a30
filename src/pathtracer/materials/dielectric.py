"""Dielectric (glass/water) material implementation.

This module implements transparent materials like glass and water with
refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.

Example:
    >>> from pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(refractive_index=1.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, Vec3, reflect, refract, schlick_reflectance
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult

WHITE = Color(1.0, 1.0, 1.0)


@dataclass(frozen=True)
class Dielectric(Material):
    """Dielectric (glass/water) material.

    Attributes:
        refractive_index: Index of refraction relative to the surrounding
            medium. Common values:
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
            Values below 1 model a less dense pocket (an air bubble in water).
    """

    refractive_index: float

    def __post_init__(self) -> None:
        if not self.refractive_index > 0.0:
            raise ValueError(
                f"Index of refraction = {self.refractive_index} must be positive."
            )

    def refraction_ratio(self, front_face: bool) -> float:
        """Ratio of indices across the surface: 1/n entering, n exiting."""
        return 1.0 / self.refractive_index if front_face else self.refractive_index

    def will_reflect_totally(self, unit_direction: Vec3, rec: HitRecord) -> bool:
        """Return True if the ray undergoes total internal reflection."""
        ratio = self.refraction_ratio(rec.is_front_face)
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)
        return ratio * sin_theta > 1.0

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult:
        """Reflect or refract. Dielectrics never absorb; attenuation is white."""
        ratio = self.refraction_ratio(rec.is_front_face)
        unit_direction = ray_in.direction.unit_vector()

        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)

        cannot_refract = self.will_reflect_totally(unit_direction, rec)
        if cannot_refract or schlick_reflectance(cos_theta, ratio) > rng.random():
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, ratio)

        return ScatterResult(
            attenuation=WHITE,
            ray=Ray(rec.point, direction, ray_in.time),
        )
