"""Ray data structure for CPU path tracing.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vec3 import Vec3
    >>> ray = Ray(origin=Vec3(0.0, 0.0, 0.0), direction=Vec3(0.0, 0.0, -1.0))
    >>> point = ray.at(5.0)  # Point 5 units along the ray
"""

from __future__ import annotations

from dataclasses import dataclass

from pathtracer.core.vec3 import Point, Vec3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point, a direction and a time stamp.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            normalized.
        time: The instant the ray exists at, used to position moving
            primitives. Defaults to 0 for scenes without motion.
    """

    origin: Point
    direction: Vec3
    time: float = 0.0

    def at(self, t: float) -> Point:
        """Compute the point ``origin + t * direction``.

        No validation is done: ``t`` may be negative or arbitrarily large.
        """
        return self.origin + self.direction * t
