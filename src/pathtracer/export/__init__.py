"""Image export module.

Components:
    color: Gamma correction and 8-bit quantization of linear colors
    ppm: ASCII PPM (P3) encoder
    bmp: Uncompressed 24-bit BMP encoder
    png: PNG encoder with its chunk and CRC layer
    writer: Extension-based format dispatch and file output
"""

from .bmp import encode_bmp
from .color import to_rgb8
from .png import encode_png
from .ppm import encode_ppm
from .writer import ImageFormat, resolve_format, save_image

__all__ = [
    "to_rgb8",
    "encode_ppm",
    "encode_bmp",
    "encode_png",
    "ImageFormat",
    "resolve_format",
    "save_image",
]
