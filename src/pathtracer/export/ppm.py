"""Plain (ASCII) PPM encoder.

Layout:
    P3
    {width} {height}
    255
    R G B        (one line per pixel, rows top to bottom, left to right)
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from pathtracer.export.color import check_rgb8


def encode_ppm(pixels: npt.NDArray[np.uint8]) -> bytes:
    """Encode an 8-bit RGB image as ASCII PPM.

    Args:
        pixels: Image array of shape (H, W, 3), dtype uint8, top row first.

    Returns:
        The complete file contents.
    """
    pixels = check_rgb8(pixels)
    height, width, _ = pixels.shape

    lines = ["P3", f"{width} {height}", "255"]
    lines.extend(f"{r} {g} {b}" for r, g, b in pixels.reshape(-1, 3).tolist())
    return ("\n".join(lines) + "\n").encode("ascii")
