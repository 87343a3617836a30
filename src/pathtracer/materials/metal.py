"""Metal (specular reflective) material implementation.

This module implements specular reflection with optional fuzziness. Perfect
metals (fuzz=0) produce mirror-like reflections, while fuzzier metals
perturb the reflected direction by a random offset inside a sphere of radius
``fuzz``.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal. Rays whose
perturbed direction ends up below the surface are absorbed, which models
self-occlusion by a rough surface.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, random_in_unit_sphere, reflect
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult, validate_albedo


@dataclass(frozen=True)
class Metal(Material):
    """Metal (specular reflective) material.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Radius of the random perturbation of the reflected direction.
            0 is a perfect mirror. Must be non-negative.
    """

    albedo: Color
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)
        if self.fuzz < 0.0:
            raise ValueError(f"Fuzz = {self.fuzz} is negative. Fuzz must be >= 0.")

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        """Reflect about the normal, perturbed by fuzz; absorb below the surface."""
        reflected = reflect(ray_in.direction.unit_vector(), rec.normal)
        direction = reflected
        if self.fuzz > 0.0:
            direction = reflected + random_in_unit_sphere(rng) * self.fuzz

        if direction.dot(rec.normal) <= 0.0:
            return None

        return ScatterResult(
            attenuation=self.albedo,
            ray=Ray(rec.point, direction, ray_in.time),
        )
