"""PNG encoding built on a small chunk layer.

Components:
    crc: CRC-32 checksum over chunk type and data
    chunk_type: Four-letter chunk type codes and their property bits
    chunk: Chunk serialization and CRC-validated parsing
    encoder: Truecolor PNG writer and chunk reader
"""

from .chunk import Chunk
from .chunk_type import ChunkType
from .crc import crc32
from .encoder import PNG_SIGNATURE, encode_png, read_chunks

__all__ = [
    "Chunk",
    "ChunkType",
    "crc32",
    "PNG_SIGNATURE",
    "encode_png",
    "read_chunks",
]
