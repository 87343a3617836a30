"""Conversion of linear framebuffer colors to 8-bit output channels.

The renderer stores averaged linear radiance. Before encoding, each channel
is gamma corrected with a square root (gamma 2.0), clamped to [0, 0.999] and
mapped to [0, 255] by multiplying by 256 and truncating.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

# Upper clamp before scaling by 256, so the brightest value maps to 255
MAX_INTENSITY = 0.999


def to_rgb8(image: npt.ArrayLike) -> npt.NDArray[np.uint8]:
    """Gamma correct, clamp and quantize a linear color array.

    Negative and NaN components map to 0; arbitrarily large components map
    to 255.

    Args:
        image: Linear color values, any shape (typically (H, W, 3)).

    Returns:
        Array of the same shape with dtype uint8.
    """
    values = np.asarray(image, dtype=np.float64)
    values = np.where(np.isnan(values), 0.0, values)
    values = np.sqrt(np.maximum(values, 0.0))
    values = np.clip(values, 0.0, MAX_INTENSITY)
    return (values * 256.0).astype(np.uint8)


def check_rgb8(pixels: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    """Validate an 8-bit RGB image buffer for the encoders.

    Args:
        pixels: Image array of shape (H, W, 3) with dtype uint8, row 0 at
            the top of the image.

    Returns:
        The same pixels as a C-contiguous array.

    Raises:
        ValueError: If the shape or dtype is wrong, or the image is empty.
    """
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (H, W, 3), got {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {pixels.dtype}")
    if pixels.shape[0] == 0 or pixels.shape[1] == 0:
        raise ValueError(f"Image must not be empty, got shape {pixels.shape}")
    return np.ascontiguousarray(pixels)
