"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: a seeded random
stream and a few small scenes and cameras.
"""

import numpy as np
import pytest

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.vec3 import Color, Point, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.lambertian import Lambertian
from pathtracer.scene.config import RenderSettings
from pathtracer.scene.world import Scene


@pytest.fixture
def rng():
    """Seeded generator so sampling tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def gray():
    return Lambertian(Color(0.5, 0.5, 0.5))


@pytest.fixture
def single_sphere_scene(gray):
    """One sphere of radius 0.5 at (0, 0, -1)."""
    return Scene([Sphere(Point(0.0, 0.0, -1.0), 0.5, gray)])


@pytest.fixture
def front_camera():
    """Pinhole camera at the origin looking down -z, 90 degree fov, 2:1."""
    return Camera(
        look_from=Point(0.0, 0.0, 0.0),
        look_at=Point(0.0, 0.0, -1.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=2.0,
    )


@pytest.fixture
def tiny_settings():
    """Settings small enough for end-to-end renders in tests."""
    return RenderSettings(width=8, height=4, samples_per_pixel=2, max_depth=5)
