"""Scene-level ray intersection over a flat list of primitives.

The scene is scanned linearly for every ray. The search interval is narrowed
to the closest hit found so far, so each primitive only reports a hit if it
is nearer than every earlier one; the last accepted record is the nearest.
Among hits at exactly equal ``t`` the first primitive added wins.

Example:
    >>> from pathtracer.scene.world import Scene
    >>> from pathtracer.geometry import Sphere
    >>> from pathtracer.materials import Lambertian
    >>> from pathtracer.core.vec3 import Vec3
    >>> gray = Lambertian(Vec3(0.5, 0.5, 0.5))
    >>> scene = Scene([Sphere(Vec3(0, 0, -1), 0.5, gray)])
    >>> scene.add(Sphere(Vec3(0, -100.5, -1), 100.0, gray))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import Hittable, HitRecord


class Scene(Hittable):
    """An ordered collection of primitives answering nearest-hit queries.

    The scene is built once and then only read during rendering.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        self.objects.append(obj)

    def clear(self) -> None:
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Find the closest intersection with ``t`` in [t_min, t_max].

        Args:
            ray: The ray to test.
            t_min: Minimum t value to consider a valid hit.
            t_max: Maximum t value to consider a valid hit.

        Returns:
            The HitRecord of the nearest primitive, or None on a miss.
        """
        closest_so_far = t_max
        result = None

        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            # Bounds are inclusive, so an equal t must not displace an earlier hit
            if rec is not None and (result is None or rec.t < closest_so_far):
                closest_so_far = rec.t
                result = rec

        return result

    def __repr__(self) -> str:
        return f"Scene(objects={len(self.objects)})"
