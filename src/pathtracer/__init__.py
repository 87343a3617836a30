"""CPU path tracer with from-scratch image encoders.

This package renders scenes of spheres by Monte Carlo path tracing and
writes the result as PPM, BMP or PNG, with support for:
- Diffuse, metal and dielectric materials
- Static and moving (motion-blurred) spheres
- Thin-lens depth of field
- Sequential or multi-process rendering with per-row random streams

Subpackages:
    core: Vectors, rays, the path tracing integrator and the renderer
    camera: Thin-lens camera with ray generation
    geometry: Sphere primitives and hit records
    materials: Scattering models (Lambertian, metal, dielectric)
    scene: Scene aggregate, scene files and built-in scenes
    export: Color conversion and the PPM, BMP and PNG encoders
"""

__version__ = "0.1.0"
