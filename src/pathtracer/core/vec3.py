"""Three-component vector type and vector utilities for CPU path tracing.

``Vec3`` is used for points, directions and colors alike (``Point`` and
``Color`` are aliases). All random helpers take an explicit
``numpy.random.Generator`` so every caller controls its own random stream.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.vec3 import Vec3, random_unit_vector
    >>> rng = np.random.default_rng(42)
    >>> n = Vec3(0.0, 1.0, 0.0)
    >>> direction = n + random_unit_vector(rng)
"""

from __future__ import annotations

import math
from collections.abc import Iterator

import numpy as np

NEAR_ZERO_EPSILON = 1e-8


class Vec3:
    """A 3D vector with component-wise arithmetic.

    Multiplication by another ``Vec3`` is component-wise (used for color
    attenuation); multiplication and division by a number scale every
    component. Operations always return new vectors; instances are never
    mutated after construction, which keeps them safe to hash and share.

    Attributes:
        x: First component (red when used as a color).
        y: Second component (green when used as a color).
        z: Third component (blue when used as a color).
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def random(cls, rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> Vec3:
        """Return a vector with each component uniform in [low, high)."""
        span = high - low
        return cls(
            low + span * rng.random(),
            low + span * rng.random(),
            low + span * rng.random(),
        )

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, t: float) -> Vec3:
        return Vec3(self.x / t, self.y / t, self.z / t)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __repr__(self) -> str:
        return f"Vec3({self.x}, {self.y}, {self.z})"

    def dot(self, other: Vec3) -> float:
        """Dot product of two vectors."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Right-handed cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def unit_vector(self) -> Vec3:
        """Return this vector scaled to unit length.

        Raises:
            ZeroDivisionError: If the vector has zero length. Callers must
                pass non-degenerate vectors.
        """
        return self / self.length()

    def is_near_zero(self) -> bool:
        """Return True if every component is below 1e-8 in magnitude."""
        return (
            abs(self.x) < NEAR_ZERO_EPSILON
            and abs(self.y) < NEAR_ZERO_EPSILON
            and abs(self.z) < NEAR_ZERO_EPSILON
        )


Point = Vec3
Color = Vec3


# =============================================================================
# Reflection and Refraction
# =============================================================================


def reflect(v: Vec3, n: Vec3) -> Vec3:
    """Reflect ``v`` about the normal ``n``: ``v - 2(v.n)n``.

    Args:
        v: The incoming direction.
        n: The surface normal (should be unit length).

    Returns:
        The mirrored direction, with the same length as ``v`` when ``n`` is a
        unit vector.
    """
    return v - n * (2.0 * v.dot(n))


def refract(uv: Vec3, n: Vec3, eta_ratio: float) -> Vec3:
    """Refract a unit direction through a surface using Snell's law.

    The refracted ray is split into the component perpendicular to the
    normal and the component parallel to it.

    Args:
        uv: The incoming direction (unit length).
        n: The surface normal on the incoming side (unit length).
        eta_ratio: Ratio of refractive indices, incident over transmitted.

    Returns:
        The refracted direction. Callers must check for total internal
        reflection beforehand.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * eta_ratio
    r_out_parallel = n * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def schlick_reflectance(cosine: float, ref_idx: float) -> float:
    """Schlick's approximation of the Fresnel reflectance.

    Args:
        cosine: Cosine of the angle between the incoming ray and the normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        Reflectance in [0, 1], increasing towards grazing angles.
    """
    r0 = ((1.0 - ref_idx) / (1.0 + ref_idx)) ** 2
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Rejection-sample a point strictly inside the unit sphere."""
    while True:
        p = Vec3.random(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Return a random direction uniformly distributed on the unit sphere."""
    while True:
        p = Vec3.random(rng, -1.0, 1.0)
        length_squared = p.length_squared()
        # Reject points too close to the center to normalize reliably.
        if 1e-160 < length_squared < 1.0:
            return p / math.sqrt(length_squared)


def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
    """Rejection-sample a point inside the unit disk in the xy-plane."""
    while True:
        p = Vec3(2.0 * rng.random() - 1.0, 2.0 * rng.random() - 1.0, 0.0)
        if p.length_squared() < 1.0:
            return p
