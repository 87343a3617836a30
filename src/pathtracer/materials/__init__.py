"""Materials module for light scattering models.

Components:
    material: Base Material interface and ScatterResult
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)

Each material provides ``scatter(ray_in, hit_record, rng)``, returning a
ScatterResult (attenuation and outgoing ray) or None when the ray is
absorbed. Materials are frozen dataclasses, so one instance can be shared by
any number of primitives and read concurrently by render workers.
"""

from .dielectric import Dielectric
from .lambertian import Lambertian
from .material import Material, ScatterResult, validate_albedo
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "validate_albedo",
    "Lambertian",
    "Metal",
    "Dielectric",
]
