"""Tests for render configuration, scene files and built-in scenes.

Tests cover:
- Defaults for omitted scene keys
- Vector, object and material parsing
- Material deduplication
- Error reporting for malformed scenes
- Loading files, including the bundled examples
- Built-in scene construction
"""

import json
from pathlib import Path

import numpy as np
import pytest

from pathtracer.core.integrator import MAX_DEPTH
from pathtracer.core.vec3 import Vec3
from pathtracer.errors import SceneConfigError
from pathtracer.geometry.moving_sphere import MovingSphere
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal
from pathtracer.scene.builtin import BUILTIN_SCENES, rtiow_final, three_spheres
from pathtracer.scene.config import (
    CameraSettings,
    RenderSettings,
    load_scene,
    parse_scene,
    parse_vec3,
)

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"

GRAY = {"Lambertian": {"albedo": [0.5, 0.5, 0.5]}}


def minimal_scene(**overrides):
    scene = {
        "look_from": [0.0, 0.0, 0.0],
        "look_to": [0.0, 0.0, -1.0],
        "world": [{"Sphere": {"center": [0.0, 0.0, -1.0], "radius": 0.5, "material": GRAY}}],
    }
    scene.update(overrides)
    return scene


class TestSettings:
    """Tests for the configuration dataclasses."""

    def test_render_defaults(self):
        settings = RenderSettings()
        assert (settings.width, settings.height) == (400, 225)
        assert settings.samples_per_pixel == 300
        assert settings.max_depth == MAX_DEPTH == 50
        assert settings.aspect_ratio == pytest.approx(16.0 / 9.0)

    @pytest.mark.parametrize("field", ["width", "height", "samples_per_pixel", "max_depth"])
    def test_render_rejects_non_positive(self, field):
        with pytest.raises(ValueError, match=field):
            RenderSettings(**{field: 0})

    def test_camera_focus_defaults_to_look_distance(self):
        settings = CameraSettings(Vec3(0.0, 0.0, 3.0), Vec3(0.0, 0.0, -1.0))
        assert settings.focus_dist == 4.0
        assert settings.build(2.0).focus_dist == 4.0

    def test_camera_explicit_focal_length(self):
        settings = CameraSettings(Vec3(0.0, 0.0, 3.0), Vec3(0.0, 0.0, -1.0), focal_length=10.0)
        camera = settings.build(1.5)
        assert camera.focus_dist == 10.0


class TestParseScene:
    """Tests for parse_scene."""

    def test_defaults(self):
        description = parse_scene(minimal_scene())
        assert description.render == RenderSettings()
        assert description.camera.vfov == 90.0
        assert description.camera.aperture == 0.0
        assert description.camera.focal_length is None
        assert description.camera.vup == Vec3(0.0, 1.0, 0.0)
        assert (description.camera.time0, description.camera.time1) == (0.0, 0.0)
        assert len(description.world) == 1

    def test_explicit_values(self):
        description = parse_scene(
            minimal_scene(
                image_width=64,
                image_height=32,
                samples_per_pixel=4,
                max_depth=3,
                viewport_fov=45.0,
                aperture=0.2,
                focal_length=2.5,
                vup={"x": 0.0, "y": 0.0, "z": 1.0},
                look_from=[0.0, -3.0, 0.0],
                look_to=[0.0, 0.0, 0.0],
                time0=0.0,
                time1=0.5,
            )
        )
        assert description.render == RenderSettings(64, 32, 4, 3)
        assert description.camera.vup == Vec3(0.0, 0.0, 1.0)
        camera = description.build_camera()
        assert camera.lens_radius == 0.1
        assert camera.focus_dist == 2.5
        assert camera.time1 == 0.5

    def test_all_object_and_material_types(self):
        world = [
            {"Sphere": {"center": [0, 0, -1], "radius": 0.5, "material": GRAY}},
            {
                "Sphere": {
                    "center": [1, 0, -1],
                    "radius": 0.5,
                    "material": {"Metal": {"albedo": [0.8, 0.6, 0.2], "fuzz": 0.3}},
                }
            },
            {
                "MovingSphere": {
                    "orig": [-1, 0, -1],
                    "dest": [-1, 1, -1],
                    "time": [0.0, 1.0],
                    "radius": 0.5,
                    "material": {"Dielectric": {"refractive_index": 1.5}},
                }
            },
        ]
        objects = list(parse_scene(minimal_scene(world=world)).world)

        assert isinstance(objects[0], Sphere)
        assert isinstance(objects[0].material, Lambertian)
        assert objects[1].material == Metal(Vec3(0.8, 0.6, 0.2), 0.3)
        assert isinstance(objects[2], MovingSphere)
        assert objects[2].center(1.0) == Vec3(-1.0, 1.0, -1.0)
        assert objects[2].material == Dielectric(1.5)

    def test_metal_fuzz_defaults_to_zero(self):
        world = [
            {
                "Sphere": {
                    "center": [0, 0, -1],
                    "radius": 0.5,
                    "material": {"Metal": {"albedo": [0.8, 0.8, 0.8]}},
                }
            }
        ]
        (sphere,) = parse_scene(minimal_scene(world=world)).world
        assert sphere.material.fuzz == 0.0

    def test_identical_materials_are_shared(self):
        world = [
            {"Sphere": {"center": [0, 0, -1], "radius": 0.5, "material": GRAY}},
            {"Sphere": {"center": [2, 0, -1], "radius": 0.5, "material": dict(GRAY)}},
            {
                "Sphere": {
                    "center": [4, 0, -1],
                    "radius": 0.5,
                    "material": {"Lambertian": {"albedo": [0.1, 0.1, 0.1]}},
                }
            },
        ]
        a, b, c = parse_scene(minimal_scene(world=world)).world
        assert a.material is b.material
        assert a.material is not c.material


class TestParseErrors:
    """Tests for malformed scene descriptions."""

    @pytest.mark.parametrize("key", ["look_from", "look_to", "world"])
    def test_missing_required_key(self, key):
        scene = minimal_scene()
        del scene[key]
        with pytest.raises(SceneConfigError, match=key):
            parse_scene(scene)

    def test_not_an_object(self):
        with pytest.raises(SceneConfigError, match="JSON object"):
            parse_scene([1, 2, 3])

    @pytest.mark.parametrize(
        "entry, message",
        [
            ({"Cube": {"center": [0, 0, 0]}}, "unknown object type"),
            ({"Sphere": {"center": [0, 0, 0], "radius": 1.0}}, "material"),
            ({"Sphere": {}, "Extra": {}}, "single type key"),
            ({"Sphere": [1, 2]}, "must be an object"),
            (
                {"Sphere": {"center": [0, 0, 0], "radius": 1.0, "material": {"Glass": {}}}},
                "unknown material type",
            ),
            ({"Sphere": {"center": [0, 0], "radius": 1.0, "material": GRAY}}, "3 components"),
            ({"Sphere": {"center": [0, 0, "a"], "radius": 1.0, "material": GRAY}}, "number"),
            ({"Sphere": {"center": [0, 0, 0], "radius": -1.0, "material": GRAY}}, "radius"),
            (
                {
                    "Sphere": {
                        "center": [0, 0, 0],
                        "radius": 1.0,
                        "material": {"Lambertian": {"albedo": [1.5, 0.5, 0.5]}},
                    }
                },
                "outside",
            ),
            (
                {
                    "MovingSphere": {
                        "orig": [0, 0, 0],
                        "dest": [1, 0, 0],
                        "time": [1.0, 1.0],
                        "radius": 1.0,
                        "material": GRAY,
                    }
                },
                "interval",
            ),
            (
                {
                    "MovingSphere": {
                        "orig": [0, 0, 0],
                        "dest": [1, 0, 0],
                        "time": 1.0,
                        "radius": 1.0,
                        "material": GRAY,
                    }
                },
                "time0, time1",
            ),
        ],
    )
    def test_bad_world_entry(self, entry, message):
        with pytest.raises(SceneConfigError, match=message):
            parse_scene(minimal_scene(world=[entry]))

    def test_error_names_the_entry(self):
        world = [
            {"Sphere": {"center": [0, 0, -1], "radius": 0.5, "material": GRAY}},
            {"Sphere": {"center": [0, 0, -1], "radius": 0.0, "material": GRAY}},
        ]
        with pytest.raises(SceneConfigError, match=r"world\[1\]"):
            parse_scene(minimal_scene(world=world))

    def test_world_must_be_a_list(self):
        with pytest.raises(SceneConfigError, match="list"):
            parse_scene(minimal_scene(world={"Sphere": {}}))

    @pytest.mark.parametrize("value", [0, -5, 2.5, "wide", True])
    def test_bad_image_width(self, value):
        with pytest.raises(SceneConfigError, match="image_width|width"):
            parse_scene(minimal_scene(image_width=value))

    def test_coincident_camera_points(self):
        with pytest.raises(SceneConfigError, match="camera"):
            parse_scene(minimal_scene(look_to=[0.0, 0.0, 0.0]))

    def test_bad_fov(self):
        with pytest.raises(SceneConfigError, match="camera"):
            parse_scene(minimal_scene(viewport_fov=180.0))

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse_scene(minimal_scene(world=None))


class TestParseVec3:
    """Tests for vector parsing."""

    def test_list_and_mapping(self):
        assert parse_vec3([1, 2, 3]) == Vec3(1.0, 2.0, 3.0)
        assert parse_vec3({"x": 1, "y": 2.5, "z": -3}) == Vec3(1.0, 2.5, -3.0)

    def test_missing_component(self):
        with pytest.raises(SceneConfigError, match="missing components"):
            parse_vec3({"x": 1, "y": 2})

    def test_non_finite(self):
        with pytest.raises(SceneConfigError, match="finite"):
            parse_vec3([0.0, float("nan"), 0.0])

    def test_integer_too_large_for_float(self):
        with pytest.raises(SceneConfigError, match="out of range"):
            parse_vec3([10**400, 0, 0])

    def test_not_a_vector(self):
        with pytest.raises(SceneConfigError, match="3-vector"):
            parse_vec3("1 2 3")


class TestLoadScene:
    """Tests for reading scene files."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text(json.dumps(minimal_scene(image_width=16, image_height=9)))
        description = load_scene(path)
        assert description.render.width == 16
        assert description.render.height == 9

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_text("{ not json")
        with pytest.raises(SceneConfigError, match="invalid JSON"):
            load_scene(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "scene.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(SceneConfigError, match="invalid JSON"):
            load_scene(path)

    def test_oversized_radius_literal(self, tmp_path):
        path = tmp_path / "scene.json"
        text = json.dumps(minimal_scene()).replace('"radius": 0.5', '"radius": 1' + "0" * 400)
        path.write_text(text)
        with pytest.raises(SceneConfigError, match="out of range"):
            load_scene(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scene(tmp_path / "missing.json")

    @pytest.mark.parametrize("name", ["three_spheres.json", "motion_blur.json"])
    def test_bundled_examples_load(self, name):
        description = load_scene(EXAMPLES_DIR / name)
        assert len(description.world) >= 3
        description.build_camera()


class TestBuiltinScenes:
    """Tests for scenes built in code."""

    def test_registry(self):
        assert set(BUILTIN_SCENES) == {"builtin.rtiow_final", "builtin.three_spheres"}
        assert BUILTIN_SCENES["builtin.rtiow_final"] is rtiow_final

    def test_rtiow_final_layout(self):
        description = rtiow_final(np.random.default_rng(0))
        objects = list(description.world)

        ground = objects[0]
        assert ground.center == Vec3(0.0, -1000.0, 0.0)
        assert ground.radius == 1000.0

        glass, brown, mirror = objects[-3:]
        assert glass.material == Dielectric(1.5)
        assert brown.material == Lambertian(Vec3(0.4, 0.2, 0.1))
        assert mirror.material == Metal(Vec3(0.7, 0.6, 0.5), 0.0)

        small = objects[1:-3]
        assert 0 < len(small) <= 22 * 22
        for sphere in small:
            assert sphere.radius == 0.2
            assert (sphere.center - Vec3(4.0, 0.2, 0.0)).length() > 0.9

    def test_rtiow_final_grid_is_diffuse_or_glass(self):
        description = rtiow_final(np.random.default_rng(3))
        small = list(description.world)[1:-3]
        kinds = {type(sphere.material) for sphere in small}
        assert kinds == {Lambertian, Dielectric}
        # About one cell in twenty is left empty
        assert len(small) < 22 * 22 - 5

    def test_rtiow_final_settings(self):
        description = rtiow_final(np.random.default_rng(0))
        assert description.render == RenderSettings(1200, 800, 500, 50)
        assert description.camera.look_from == Vec3(13.0, 2.0, 3.0)
        assert description.camera.aperture == 0.1
        assert description.camera.focus_dist == 10.0

    def test_rtiow_final_is_seeded(self):
        a = [s.center for s in rtiow_final(np.random.default_rng(5)).world]
        b = [s.center for s in rtiow_final(np.random.default_rng(5)).world]
        assert a == b

    def test_three_spheres(self):
        description = three_spheres()
        assert len(description.world) == 4
        description.build_camera()
