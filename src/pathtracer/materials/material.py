"""Base material interface and scatter result.

A material decides what happens to a ray that strikes a surface: it either
continues as a new ray with a color attenuation, or it is absorbed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Color
from pathtracer.geometry.hittable import HitRecord


class ScatterResult(NamedTuple):
    """Outcome of a scattering event that did not absorb the ray.

    Attributes:
        attenuation: Per-channel factor applied to the light carried back
            along the outgoing ray.
        ray: The outgoing ray, starting at the hit point.
    """

    attenuation: Color
    ray: Ray


class Material(ABC):
    """Abstract scattering model. Instances are immutable and shareable."""

    @abstractmethod
    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        """Scatter ``ray_in`` at the hit described by ``rec``.

        Args:
            ray_in: The incoming ray.
            rec: The hit record for the surface point.
            rng: Random stream owned by the calling work item.

        Returns:
            A ScatterResult, or None if the ray is absorbed.
        """


def validate_albedo(albedo: Color) -> None:
    """Reject albedo components outside [0, 1].

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
