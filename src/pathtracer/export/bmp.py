"""Uncompressed 24-bit BMP encoder.

The file is a 14-byte file header, a 40-byte BITMAPINFOHEADER and the pixel
array. Rows are stored bottom to top in BGR order, each padded with zero
bytes to a multiple of 4 bytes.
"""

from __future__ import annotations

import struct

import numpy as np
import numpy.typing as npt

from pathtracer.export.color import check_rgb8

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
PIXEL_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE

# 72 DPI expressed in pixels per meter
PIXELS_PER_METER = 2835


def encode_bmp(pixels: npt.NDArray[np.uint8]) -> bytes:
    """Encode an 8-bit RGB image as a 24-bit BMP.

    Args:
        pixels: Image array of shape (H, W, 3), dtype uint8, top row first.

    Returns:
        The complete file contents.
    """
    pixels = check_rgb8(pixels)
    height, width, _ = pixels.shape

    row_size = width * 3
    padding = (-row_size) % 4

    # Bottom row first, channels reversed to BGR
    rows = pixels[::-1, :, ::-1].reshape(height, row_size)
    if padding:
        rows = np.pad(rows, ((0, 0), (0, padding)))
    pixel_data = np.ascontiguousarray(rows, dtype=np.uint8).tobytes()

    file_size = PIXEL_OFFSET + len(pixel_data)
    file_header = struct.pack("<2sIHHI", b"BM", file_size, 0, 0, PIXEL_OFFSET)
    info_header = struct.pack(
        "<IiiHHIIiiII",
        INFO_HEADER_SIZE,
        width,
        height,  # positive height: bottom-up row order
        1,  # color planes
        24,  # bits per pixel
        0,  # BI_RGB, no compression
        len(pixel_data),
        PIXELS_PER_METER,
        PIXELS_PER_METER,
        0,  # palette colors
        0,  # important colors
    )
    return file_header + info_header + pixel_data
