"""Camera module for view and ray generation.

Components:
    thin_lens: Perspective camera with optional depth of field and shutter

Camera responsibilities:
    - Transform (s, t) viewport coordinates to world-space rays
    - Support look-at positioning with up vector
    - Simulate a finite lens aperture focused at a given distance
    - Time-stamp rays across the shutter interval for motion blur

Ray generation uses normalized viewport coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera

__all__ = [
    "Camera",
]
