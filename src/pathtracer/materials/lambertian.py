"""Lambertian (ideal diffuse) material implementation.

Scatter directions are drawn as ``normal + random_unit_vector()``, which
produces a cosine-weighted distribution around the normal. With that
sampling the BRDF and PDF cancel and the attenuation is simply the albedo:
    attenuation = (albedo / pi) * cos_theta / (cos_theta / pi) = albedo

Example:
    >>> import numpy as np
    >>> from pathtracer.materials.lambertian import Lambertian
    >>> from pathtracer.core.vec3 import Color
    >>> red = Lambertian(Color(0.8, 0.1, 0.1))
    >>> # result = red.scatter(ray, hit_record, np.random.default_rng())
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color, random_unit_vector
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material, ScatterResult, validate_albedo


@dataclass(frozen=True)
class Lambertian(Material):
    """Lambertian (ideal diffuse) material.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
    """

    albedo: Color

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult:
        """Scatter diffusely around the normal. Never absorbs."""
        scatter_direction = rec.normal + random_unit_vector(rng)

        # The random vector can nearly cancel the normal
        if scatter_direction.is_near_zero():
            scatter_direction = rec.normal

        return ScatterResult(
            attenuation=self.albedo,
            ray=Ray(rec.point, scatter_direction, ray_in.time),
        )
