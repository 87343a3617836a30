"""Minimal PNG writer and chunk reader.

Images are written as 8-bit truecolor (color type 2), non-interlaced, with
filter type 0 on every scanline and a single zlib-compressed IDAT chunk.
"""

from __future__ import annotations

import struct
import zlib

import numpy as np
import numpy.typing as npt

from pathtracer.errors import PngFormatError
from pathtracer.export.color import check_rgb8
from pathtracer.export.png.chunk import Chunk
from pathtracer.export.png.chunk_type import IDAT, IEND, IHDR

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

BIT_DEPTH = 8
COLOR_TYPE_TRUECOLOR = 2
FILTER_NONE = 0


def encode_png(pixels: npt.NDArray[np.uint8], compression_level: int = 6) -> bytes:
    """Encode an 8-bit RGB image as PNG.

    Args:
        pixels: Image array of shape (H, W, 3), dtype uint8, top row first.
        compression_level: zlib level, 0 (none) to 9 (best).

    Returns:
        The complete file contents.
    """
    pixels = check_rgb8(pixels)
    height, width, _ = pixels.shape

    header = struct.pack(
        ">IIBBBBB",
        width,
        height,
        BIT_DEPTH,
        COLOR_TYPE_TRUECOLOR,
        0,  # compression method: deflate
        0,  # filter method: adaptive
        0,  # no interlace
    )

    # Each scanline is prefixed with its filter type byte
    filters = np.full((height, 1), FILTER_NONE, dtype=np.uint8)
    scanlines = np.concatenate([filters, pixels.reshape(height, width * 3)], axis=1)
    compressed = zlib.compress(scanlines.tobytes(), compression_level)

    chunks = (Chunk(IHDR, header), Chunk(IDAT, compressed), Chunk(IEND))
    return PNG_SIGNATURE + b"".join(chunk.as_bytes() for chunk in chunks)


def read_chunks(data: bytes) -> list[Chunk]:
    """Split a PNG file into its chunks, validating every CRC.

    Args:
        data: Complete PNG file contents.

    Returns:
        The chunks in file order.

    Raises:
        PngFormatError: If the signature is wrong or a chunk is truncated.
        CrcMismatchError: If any chunk fails its CRC check.
    """
    if not data.startswith(PNG_SIGNATURE):
        raise PngFormatError("Missing PNG signature")

    chunks = []
    offset = len(PNG_SIGNATURE)
    while offset < len(data):
        chunk, offset = Chunk.read(data, offset)
        chunks.append(chunk)
    return chunks
