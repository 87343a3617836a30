"""Built-in scenes selectable by name from the command line.

Scenes:
    builtin.rtiow_final: The random spheres cover scene. A large gray ground
        sphere, a 22 x 22 grid of small randomly placed diffuse and glass
        spheres with some cells left empty, and three large feature spheres
        (glass, brown diffuse, mirror metal), viewed through a thin lens
        focused at 10 units.
    builtin.three_spheres: A small deterministic scene. Diffuse center
        sphere between a glass sphere and a fuzzy metal sphere, on a
        large yellow-green ground.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from pathtracer.core.vec3 import Color, Point, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.scene.config import CameraSettings, RenderSettings, SceneDescription
from pathtracer.scene.world import Scene

# Grid spans [-GRID_EXTENT, GRID_EXTENT) on both axes
GRID_EXTENT = 11
SMALL_RADIUS = 0.2
GLASS_INDEX = 1.5


def rtiow_final(rng: np.random.Generator | None = None) -> SceneDescription:
    """Build the random spheres cover scene.

    Args:
        rng: Random stream for sphere placement and colors. A fresh
            OS-seeded generator when omitted.

    Returns:
        A 1200 x 800, 500 spp description of the scene.
    """
    if rng is None:
        rng = np.random.default_rng()

    world = Scene()
    world.add(Sphere(Point(0.0, -1000.0, 0.0), 1000.0, Lambertian(Color(0.5, 0.5, 0.5))))

    glass = Dielectric(GLASS_INDEX)
    clearing = Point(4.0, 0.2, 0.0)

    for a in range(-GRID_EXTENT, GRID_EXTENT):
        for b in range(-GRID_EXTENT, GRID_EXTENT):
            choose_mat = rng.random()
            center = Point(a + 0.9 * rng.random(), SMALL_RADIUS, b + 0.9 * rng.random())

            # Keep the space around the large metal sphere clear
            if (center - clearing).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = Color.random(rng) * Color.random(rng)
                world.add(Sphere(center, SMALL_RADIUS, Lambertian(albedo)))
            elif choose_mat < 0.95:
                world.add(Sphere(center, SMALL_RADIUS, glass))
            # The remaining cells stay empty

    world.add(Sphere(Point(0.0, 1.0, 0.0), 1.0, glass))
    world.add(Sphere(Point(-4.0, 1.0, 0.0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point(4.0, 1.0, 0.0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    return SceneDescription(
        render=RenderSettings(width=1200, height=800, samples_per_pixel=500, max_depth=50),
        camera=CameraSettings(
            look_from=Point(13.0, 2.0, 3.0),
            look_at=Point(0.0, 0.0, 0.0),
            vup=Vec3(0.0, 1.0, 0.0),
            vfov=90.0,
            aperture=0.1,
            focal_length=10.0,
        ),
        world=world,
    )


def three_spheres(rng: np.random.Generator | None = None) -> SceneDescription:
    """Build a small fixed scene of three spheres on a ground plane.

    ``rng`` is accepted for a uniform builtin signature and ignored.
    """
    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(GLASS_INDEX)
    metal = Metal(Color(0.8, 0.6, 0.2), 0.1)

    world = Scene(
        [
            Sphere(Point(0.0, -100.5, -1.0), 100.0, ground),
            Sphere(Point(0.0, 0.0, -1.0), 0.5, center),
            Sphere(Point(-1.0, 0.0, -1.0), 0.5, glass),
            Sphere(Point(1.0, 0.0, -1.0), 0.5, metal),
        ]
    )

    return SceneDescription(
        render=RenderSettings(width=400, height=225, samples_per_pixel=100, max_depth=50),
        camera=CameraSettings(
            look_from=Point(-2.0, 2.0, 1.0),
            look_at=Point(0.0, 0.0, -1.0),
            vup=Vec3(0.0, 1.0, 0.0),
            vfov=20.0,
        ),
        world=world,
    )


BUILTIN_SCENES: dict[str, Callable[[np.random.Generator | None], SceneDescription]] = {
    "builtin.rtiow_final": rtiow_final,
    "builtin.three_spheres": three_spheres,
}
