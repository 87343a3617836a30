"""Scene module for scene representation and scene descriptions.

This module handles what gets rendered and how it is configured:

Components:
    world: Scene container answering nearest-hit queries over its objects
    config: Render/camera settings and JSON scene file loading
    builtin: Named scenes built in code

Scene data is organized for simple sharing across worker processes:
    - A flat, ordered list of primitives scanned linearly per ray
    - Materials shared by reference between primitives
    - Plain picklable objects, no global state
"""

# Scene aggregate
from .world import Scene

# Scene descriptions and configuration
from .config import (
    CameraSettings,
    RenderSettings,
    SceneDescription,
    load_scene,
    parse_scene,
    parse_vec3,
)

# Built-in scenes
from .builtin import BUILTIN_SCENES, rtiow_final, three_spheres

__all__ = [
    # World module
    "Scene",
    # Config module
    "RenderSettings",
    "CameraSettings",
    "SceneDescription",
    "load_scene",
    "parse_scene",
    "parse_vec3",
    # Builtin module
    "BUILTIN_SCENES",
    "rtiow_final",
    "three_spheres",
]
