"""Thin-lens camera model for perspective ray generation with depth of field.

The camera supports:
- Look-at positioning (look_from, look_at, vup)
- Vertical field of view specification
- Arbitrary aspect ratios
- Depth of field through a finite aperture focused at a given distance
- A shutter interval that time-stamps rays for motion blur

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport sits on the focus plane, ``focus_dist`` along -w. With a zero
aperture every ray starts at ``look_from`` (a pinhole camera); otherwise the
origin is jittered over a lens disk of radius ``aperture / 2`` while the
target point on the focus plane stays fixed, so objects off the focus plane
blur.

Example:
    >>> import numpy as np
    >>> from pathtracer.camera.thin_lens import Camera
    >>> from pathtracer.core.vec3 import Vec3
    >>>
    >>> # Create camera looking at origin from z=3
    >>> camera = Camera(
    ...     look_from=Vec3(0.0, 0.0, 3.0),
    ...     look_at=Vec3(0.0, 0.0, 0.0),
    ...     vup=Vec3(0.0, 1.0, 0.0),
    ...     vfov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5, np.random.default_rng())  # Image center
"""

from __future__ import annotations

import math

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vec3 import Point, Vec3, random_in_unit_disk


class Camera:
    """An immutable thin-lens camera.

    All derived quantities are computed once at construction; ``get_ray``
    only reads them, so one camera can be shared by every render worker.

    Attributes:
        origin: Camera position (``look_from``).
        u: Right direction in world space.
        v: Up direction in world space.
        w: Backward direction (opposite the view direction).
        horizontal: Full viewport width vector on the focus plane.
        vertical: Full viewport height vector on the focus plane.
        lower_left: Lower-left corner of the viewport.
        lens_radius: Half the aperture.
        time0: Shutter open time.
        time1: Shutter close time.
    """

    def __init__(
        self,
        look_from: Point,
        look_at: Point,
        vup: Vec3 = Vec3(0.0, 1.0, 0.0),
        vfov: float = 90.0,
        aspect_ratio: float = 16.0 / 9.0,
        aperture: float = 0.0,
        focus_dist: float | None = None,
        time0: float = 0.0,
        time1: float = 0.0,
    ) -> None:
        """Derive the camera basis and viewport from view parameters.

        Args:
            look_from: Camera position in world space.
            look_at: Point the camera is looking at.
            vup: Up direction for camera orientation (typically (0, 1, 0)).
            vfov: Vertical field of view in degrees, in (0, 180).
            aspect_ratio: Width divided by height of the output image.
            aperture: Lens diameter. 0 disables depth of field.
            focus_dist: Distance to the plane in perfect focus. Defaults to
                the distance between ``look_from`` and ``look_at``.
            time0: Shutter open time.
            time1: Shutter close time. Rays get a uniform random time in
                [time0, time1] when ``time1 > time0``, otherwise ``time0``.

        Raises:
            ValueError: If any parameter is out of range or the view
                direction is degenerate.
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"Vertical field of view must be in (0, 180) degrees, got {vfov}")
        if not aspect_ratio > 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {aspect_ratio}")
        if aperture < 0.0:
            raise ValueError(f"Aperture must be non-negative, got {aperture}")

        view = look_from - look_at
        if view.is_near_zero():
            raise ValueError("look_from and look_at must be distinct points")
        if focus_dist is None:
            focus_dist = view.length()
        if not focus_dist > 0.0:
            raise ValueError(f"Focus distance must be positive, got {focus_dist}")

        right = vup.cross(view)
        if right.is_near_zero():
            raise ValueError("vup must not be parallel to the view direction")

        h = math.tan(math.radians(vfov) / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        self.w = view.unit_vector()
        self.u = right.unit_vector()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * (focus_dist * viewport_width)
        self.vertical = self.v * (focus_dist * viewport_height)
        self.lower_left = (
            self.origin - self.horizontal / 2.0 - self.vertical / 2.0 - self.w * focus_dist
        )

        self.lens_radius = aperture / 2.0
        self.focus_dist = focus_dist
        self.time0 = time0
        self.time1 = time1

    def get_ray(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generate a ray through normalized viewport coordinates (s, t).

        The coordinates are normalized:
        - s = 0: left edge, s = 1: right edge
        - t = 0: bottom edge, t = 1: top edge

        Randomness is consumed only for the lens offset (aperture > 0) and
        the ray time (time1 > time0).

        Args:
            s: Horizontal coordinate (left to right).
            t: Vertical coordinate (bottom to top).
            rng: Random stream owned by the calling work item.

        Returns:
            A Ray from the (possibly jittered) lens point toward the
            viewport point on the focus plane.
        """
        origin = self.origin
        if self.lens_radius > 0.0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            origin = origin + self.u * rd.x + self.v * rd.y

        time = self.time0
        if self.time1 > self.time0:
            time = self.time0 + (self.time1 - self.time0) * rng.random()

        target = self.lower_left + self.horizontal * s + self.vertical * t
        return Ray(origin, target - origin, time)

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Get the derived camera vectors for debugging.

        Returns:
            Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
        """
        return {
            "origin": tuple(self.origin),
            "u": tuple(self.u),
            "v": tuple(self.v),
            "w": tuple(self.w),
            "horizontal": tuple(self.horizontal),
            "vertical": tuple(self.vertical),
            "lower_left": tuple(self.lower_left),
        }

    def __repr__(self) -> str:
        return (
            f"Camera(origin={self.origin!r}, lens_radius={self.lens_radius}, "
            f"focus_dist={self.focus_dist})"
        )
