"""Render configuration and JSON scene files.

A scene file is a JSON object. Every key except ``look_from``, ``look_to``
and ``world`` is optional:

.. code-block:: json

    {
        "image_width": 400,
        "image_height": 225,
        "samples_per_pixel": 300,
        "max_depth": 50,
        "viewport_fov": 90.0,
        "aperture": 0.0,
        "focal_length": null,
        "look_from": [0.0, 0.0, 1.0],
        "look_to": [0.0, 0.0, -1.0],
        "vup": [0.0, 1.0, 0.0],
        "time0": 0.0,
        "time1": 0.0,
        "world": [
            {"Sphere": {"center": [0, 0, -1], "radius": 0.5,
                        "material": {"Lambertian": {"albedo": [0.5, 0.5, 0.5]}}}},
            {"MovingSphere": {"orig": [1, 0, -1], "dest": [1, 0.5, -1],
                              "time": [0.0, 1.0], "radius": 0.5,
                              "material": {"Metal": {"albedo": [0.8, 0.8, 0.8],
                                                     "fuzz": 0.1}}}}
        ]
    }

Objects and materials are tagged by a single key naming their type. Vectors
are ``[x, y, z]`` lists or ``{"x": .., "y": .., "z": ..}`` mappings.

Example:
    >>> from pathtracer.scene.config import load_scene
    >>> description = load_scene("examples/three_spheres.json")
    >>> camera = description.camera.build(description.render.aspect_ratio)
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.integrator import MAX_DEPTH
from pathtracer.core.vec3 import Color, Point, Vec3
from pathtracer.errors import SceneConfigError
from pathtracer.geometry.hittable import Hittable
from pathtracer.geometry.moving_sphere import MovingSphere
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.scene.world import Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class RenderSettings:
    """Image size and sampling parameters.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Jittered paths averaged per pixel.
        max_depth: Maximum bounces per path.
    """

    width: int = 400
    height: int = 225
    samples_per_pixel: int = 300
    max_depth: int = MAX_DEPTH

    def __post_init__(self) -> None:
        for name in ("width", "height", "samples_per_pixel", "max_depth"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


@dataclass
class CameraSettings:
    """Camera placement and lens parameters, as given in a scene file.

    Attributes:
        look_from: Camera position.
        look_at: Point the camera looks toward.
        vup: World up direction.
        vfov: Vertical field of view in degrees.
        aperture: Lens diameter; 0 gives a pinhole camera.
        focal_length: Distance to the focus plane. None focuses on
            ``look_at``.
        time0: Shutter open time.
        time1: Shutter close time.
    """

    look_from: Point
    look_at: Point
    vup: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    vfov: float = 90.0
    aperture: float = 0.0
    focal_length: float | None = None
    time0: float = 0.0
    time1: float = 0.0

    @property
    def focus_dist(self) -> float:
        if self.focal_length is None:
            return (self.look_from - self.look_at).length()
        return self.focal_length

    def build(self, aspect_ratio: float) -> Camera:
        """Create the camera for an image of the given aspect ratio."""
        return Camera(
            look_from=self.look_from,
            look_at=self.look_at,
            vup=self.vup,
            vfov=self.vfov,
            aspect_ratio=aspect_ratio,
            aperture=self.aperture,
            focus_dist=self.focus_dist,
            time0=self.time0,
            time1=self.time1,
        )


@dataclass
class SceneDescription:
    """Everything needed to render one image."""

    render: RenderSettings
    camera: CameraSettings
    world: Scene

    def build_camera(self) -> Camera:
        return self.camera.build(self.render.aspect_ratio)


# =============================================================================
# Parsing
# =============================================================================


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneConfigError(f"{where}: expected a number, got {value!r}")
    try:
        number = float(value)
    except OverflowError as err:
        raise SceneConfigError(f"{where}: number out of range for a float") from err
    if not math.isfinite(number):
        raise SceneConfigError(f"{where}: expected a finite number, got {value!r}")
    return number


def _integer(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneConfigError(f"{where}: expected an integer, got {value!r}")
    return value


def parse_vec3(value: Any, where: str = "vector") -> Vec3:
    """Parse ``[x, y, z]`` or ``{"x": .., "y": .., "z": ..}`` into a Vec3."""
    if isinstance(value, Mapping):
        missing = {"x", "y", "z"} - set(value)
        if missing:
            raise SceneConfigError(f"{where}: missing components {sorted(missing)}")
        components = [value["x"], value["y"], value["z"]]
    elif isinstance(value, (list, tuple)):
        if len(value) != 3:
            raise SceneConfigError(f"{where}: expected 3 components, got {len(value)}")
        components = list(value)
    else:
        raise SceneConfigError(f"{where}: expected a 3-vector, got {value!r}")
    x, y, z = (_number(c, where) for c in components)
    return Vec3(x, y, z)


def _tagged(entry: Any, where: str) -> tuple[str, Mapping[str, Any]]:
    """Split an externally tagged entry ``{"Tag": {...}}`` into its parts."""
    if not isinstance(entry, Mapping) or len(entry) != 1:
        raise SceneConfigError(f"{where}: expected an object with a single type key")
    ((tag, body),) = entry.items()
    if not isinstance(body, Mapping):
        raise SceneConfigError(f"{where}: {tag} body must be an object")
    return tag, body


def _require(body: Mapping[str, Any], key: str, where: str) -> Any:
    try:
        return body[key]
    except KeyError:
        raise SceneConfigError(f"{where}: missing required key {key!r}") from None


def _lambertian(body: Mapping[str, Any], where: str) -> Material:
    return Lambertian(parse_vec3(_require(body, "albedo", where), f"{where}.albedo"))


def _metal(body: Mapping[str, Any], where: str) -> Material:
    albedo = parse_vec3(_require(body, "albedo", where), f"{where}.albedo")
    fuzz = _number(body.get("fuzz", 0.0), f"{where}.fuzz")
    return Metal(albedo, fuzz)


def _dielectric(body: Mapping[str, Any], where: str) -> Material:
    return Dielectric(_number(_require(body, "refractive_index", where), f"{where}.refractive_index"))


MATERIAL_PARSERS: dict[str, Callable[[Mapping[str, Any], str], Material]] = {
    "Lambertian": _lambertian,
    "Metal": _metal,
    "Dielectric": _dielectric,
}


class _MaterialTable:
    """Parses materials, handing out one shared instance per distinct value."""

    def __init__(self) -> None:
        self._materials: dict[Material, Material] = {}

    def __len__(self) -> int:
        return len(self._materials)

    def parse(self, entry: Any, where: str) -> Material:
        tag, body = _tagged(entry, where)
        parser = MATERIAL_PARSERS.get(tag)
        if parser is None:
            raise SceneConfigError(
                f"{where}: unknown material type {tag!r} "
                f"(expected one of {', '.join(MATERIAL_PARSERS)})"
            )
        try:
            material = parser(body, f"{where}.{tag}")
        except SceneConfigError:
            raise
        except ValueError as err:
            raise SceneConfigError(f"{where}.{tag}: {err}") from err
        return self._materials.setdefault(material, material)


def _sphere(body: Mapping[str, Any], materials: _MaterialTable, where: str) -> Hittable:
    return Sphere(
        center=parse_vec3(_require(body, "center", where), f"{where}.center"),
        radius=_number(_require(body, "radius", where), f"{where}.radius"),
        material=materials.parse(_require(body, "material", where), f"{where}.material"),
    )


def _moving_sphere(body: Mapping[str, Any], materials: _MaterialTable, where: str) -> Hittable:
    times = _require(body, "time", where)
    if not isinstance(times, (list, tuple)) or len(times) != 2:
        raise SceneConfigError(f"{where}.time: expected [time0, time1], got {times!r}")
    return MovingSphere(
        orig=parse_vec3(_require(body, "orig", where), f"{where}.orig"),
        dest=parse_vec3(_require(body, "dest", where), f"{where}.dest"),
        time0=_number(times[0], f"{where}.time[0]"),
        time1=_number(times[1], f"{where}.time[1]"),
        radius=_number(_require(body, "radius", where), f"{where}.radius"),
        material=materials.parse(_require(body, "material", where), f"{where}.material"),
    )


OBJECT_PARSERS: dict[str, Callable[[Mapping[str, Any], _MaterialTable, str], Hittable]] = {
    "Sphere": _sphere,
    "MovingSphere": _moving_sphere,
}


def parse_world(entries: Any) -> Scene:
    """Build a Scene from the ``world`` list of a scene file.

    Raises:
        SceneConfigError: If an entry is malformed or has invalid values.
    """
    if not isinstance(entries, list):
        raise SceneConfigError(f"world: expected a list of objects, got {type(entries).__name__}")

    materials = _MaterialTable()
    scene = Scene()
    for i, entry in enumerate(entries):
        where = f"world[{i}]"
        tag, body = _tagged(entry, where)
        parser = OBJECT_PARSERS.get(tag)
        if parser is None:
            raise SceneConfigError(
                f"{where}: unknown object type {tag!r} "
                f"(expected one of {', '.join(OBJECT_PARSERS)})"
            )
        try:
            scene.add(parser(body, materials, f"{where}.{tag}"))
        except SceneConfigError:
            raise
        except ValueError as err:
            raise SceneConfigError(f"{where}.{tag}: {err}") from err

    logger.debug("Parsed %d objects sharing %d materials", len(scene), len(materials))
    return scene


def parse_scene(data: Mapping[str, Any]) -> SceneDescription:
    """Build a SceneDescription from a decoded scene file.

    Args:
        data: The top-level JSON object.

    Returns:
        The render settings, camera settings and world.

    Raises:
        SceneConfigError: If any part of the description is invalid.
    """
    if not isinstance(data, Mapping):
        raise SceneConfigError(f"Scene must be a JSON object, got {type(data).__name__}")

    defaults = RenderSettings()
    try:
        render = RenderSettings(
            width=_integer(data.get("image_width", defaults.width), "image_width"),
            height=_integer(data.get("image_height", defaults.height), "image_height"),
            samples_per_pixel=_integer(
                data.get("samples_per_pixel", defaults.samples_per_pixel), "samples_per_pixel"
            ),
            max_depth=_integer(data.get("max_depth", defaults.max_depth), "max_depth"),
        )
    except SceneConfigError:
        raise
    except ValueError as err:
        raise SceneConfigError(str(err)) from err

    focal_length = data.get("focal_length")
    camera = CameraSettings(
        look_from=parse_vec3(_require(data, "look_from", "scene"), "look_from"),
        look_at=parse_vec3(_require(data, "look_to", "scene"), "look_to"),
        vup=parse_vec3(data.get("vup", [0.0, 1.0, 0.0]), "vup"),
        vfov=_number(data.get("viewport_fov", 90.0), "viewport_fov"),
        aperture=_number(data.get("aperture", 0.0), "aperture"),
        focal_length=None if focal_length is None else _number(focal_length, "focal_length"),
        time0=_number(data.get("time0", 0.0), "time0"),
        time1=_number(data.get("time1", 0.0), "time1"),
    )

    # Surface camera problems (coincident points, bad fov) at load time
    try:
        camera.build(render.aspect_ratio)
    except ValueError as err:
        raise SceneConfigError(f"camera: {err}") from err

    world = parse_world(_require(data, "world", "scene"))
    return SceneDescription(render=render, camera=camera, world=world)


def load_scene(path: str | Path) -> SceneDescription:
    """Read and parse a JSON scene file.

    Raises:
        SceneConfigError: If the file is not valid JSON or not a valid scene.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as err:
            # Also covers UnicodeDecodeError and oversized integer literals
            raise SceneConfigError(f"{path}: invalid JSON: {err}") from err

    logger.info("Loading scene %s", path)
    return parse_scene(data)
