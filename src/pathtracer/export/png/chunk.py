"""PNG chunk encoding and parsing.

Wire layout of one chunk::

    length (4 bytes, big-endian, data only)
    chunk type (4 ASCII letters)
    data (length bytes)
    CRC-32 (4 bytes, big-endian) over chunk type + data
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from pathtracer.errors import CrcMismatchError, PngFormatError
from pathtracer.export.png.chunk_type import ChunkType
from pathtracer.export.png.crc import crc32

# length + type before the data, CRC after it
CHUNK_OVERHEAD = 12
MAX_DATA_LENGTH = 2**31 - 1


@dataclass(frozen=True)
class Chunk:
    """One PNG chunk: a type code and its payload."""

    chunk_type: ChunkType
    data: bytes = b""

    def __post_init__(self):
        object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) > MAX_DATA_LENGTH:
            raise PngFormatError(f"Chunk data too long: {len(self.data)} bytes")

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def crc(self) -> int:
        return crc32(self.chunk_type.as_bytes() + self.data)

    def data_as_string(self) -> str:
        """Decode the payload as UTF-8."""
        return self.data.decode("utf-8")

    def as_bytes(self) -> bytes:
        """Serialize the chunk in PNG wire format."""
        type_and_data = self.chunk_type.as_bytes() + self.data
        return (
            struct.pack(">I", len(self.data))
            + type_and_data
            + struct.pack(">I", crc32(type_and_data))
        )

    @classmethod
    def read(cls, buffer: bytes, offset: int = 0) -> tuple[Chunk, int]:
        """Parse one chunk starting at ``offset``.

        Args:
            buffer: Bytes holding one or more serialized chunks.
            offset: Position of the chunk's length field.

        Returns:
            The parsed chunk and the offset just past its CRC.

        Raises:
            PngFormatError: If the buffer ends before the chunk does.
            ChunkTypeError: If the type code is not four ASCII letters.
            CrcMismatchError: If the stored CRC does not match.
        """
        if len(buffer) - offset < CHUNK_OVERHEAD:
            raise PngFormatError(f"Truncated chunk at offset {offset}")

        (length,) = struct.unpack_from(">I", buffer, offset)
        end = offset + CHUNK_OVERHEAD + length
        if length > MAX_DATA_LENGTH or end > len(buffer):
            raise PngFormatError(
                f"Truncated chunk at offset {offset}: declared {length} data bytes"
            )

        chunk_type = ChunkType(buffer[offset + 4 : offset + 8])
        data = bytes(buffer[offset + 8 : end - 4])
        (stored_crc,) = struct.unpack_from(">I", buffer, end - 4)

        actual_crc = crc32(buffer[offset + 4 : end - 4])
        if stored_crc != actual_crc:
            raise CrcMismatchError(
                f"Invalid CRC checksum for {chunk_type} chunk: "
                f"stored {stored_crc:#010x}, computed {actual_crc:#010x}"
            )

        return cls(chunk_type, data), end

    @classmethod
    def from_bytes(cls, raw: bytes) -> Chunk:
        """Parse exactly one serialized chunk.

        Raises:
            PngFormatError: If ``raw`` is truncated or has trailing bytes.
            ChunkTypeError: If the type code is invalid.
            CrcMismatchError: If the stored CRC does not match.
        """
        chunk, end = cls.read(raw)
        if end != len(raw):
            raise PngFormatError(f"{len(raw) - end} trailing bytes after chunk")
        return chunk

    def __str__(self) -> str:
        return f"Chunk({self.chunk_type}, length={self.length}, crc={self.crc:#010x})"
