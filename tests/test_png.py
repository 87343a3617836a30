"""Tests for the PNG chunk layer and encoder.

Tests cover:
- CRC-32 against known values and zlib
- Chunk type validation and property bits
- Chunk serialization, parsing and CRC validation
- Corruption detection
- Full-file structure of encoded images
"""

import struct
import zlib

import numpy as np
import pytest

from pathtracer.errors import ChunkTypeError, CrcMismatchError, PngFormatError
from pathtracer.export.png import PNG_SIGNATURE, Chunk, ChunkType, crc32, encode_png, read_chunks

MESSAGE = b"This is where your secret message will be!"
MESSAGE_CRC = 2882656334


def raw_chunk(length=42, chunk_type=b"RuSt", data=MESSAGE, crc=MESSAGE_CRC):
    return struct.pack(">I", length) + chunk_type + data + struct.pack(">I", crc)


class TestCrc32:
    """Tests for the CRC-32 checksum."""

    def test_known_values(self):
        assert crc32(b"") == 0
        assert crc32(b"IEND") == 0xAE426082
        assert crc32(b"RuSt" + MESSAGE) == MESSAGE_CRC

    @pytest.mark.parametrize("size", [1, 7, 256, 5000])
    def test_matches_zlib(self, size):
        data = np.random.default_rng(size).integers(0, 256, size, dtype=np.uint8).tobytes()
        assert crc32(data) == zlib.crc32(data)


class TestChunkType:
    """Tests for chunk type codes."""

    def test_from_bytes(self):
        assert ChunkType(bytes([82, 117, 83, 116])).as_bytes() == b"RuSt"

    def test_from_str(self):
        assert ChunkType.from_str("RuSt") == ChunkType(bytes([82, 117, 83, 116]))

    def test_str_and_repr(self):
        chunk_type = ChunkType.from_str("RuSt")
        assert str(chunk_type) == "RuSt"
        assert repr(chunk_type) == "ChunkType('RuSt')"

    def test_property_bits(self):
        assert ChunkType.from_str("RuSt").is_critical
        assert not ChunkType.from_str("ruSt").is_critical
        assert ChunkType.from_str("RUSt").is_public
        assert not ChunkType.from_str("RuSt").is_public
        assert ChunkType.from_str("RuSt").is_reserved_bit_valid
        assert not ChunkType.from_str("Rust").is_reserved_bit_valid
        assert ChunkType.from_str("RuSt").is_safe_to_copy
        assert not ChunkType.from_str("RuST").is_safe_to_copy

    def test_validity(self):
        assert ChunkType.from_str("RuSt").is_valid
        assert not ChunkType.from_str("Rust").is_valid

    def test_standard_chunks_are_critical(self):
        for name in ("IHDR", "IDAT", "IEND"):
            chunk_type = ChunkType.from_str(name)
            assert chunk_type.is_critical and chunk_type.is_public and chunk_type.is_valid

    @pytest.mark.parametrize("name", ["Ru1t", "Ru t", "R_St"])
    def test_non_letters_rejected(self, name):
        with pytest.raises(ChunkTypeError, match="letters"):
            ChunkType.from_str(name)

    @pytest.mark.parametrize("name", ["Rus", "RuStt", ""])
    def test_wrong_length_rejected(self, name):
        with pytest.raises(ChunkTypeError, match="4 bytes"):
            ChunkType.from_str(name)

    def test_non_ascii_rejected(self):
        with pytest.raises(ChunkTypeError):
            ChunkType.from_str("Ruét")

    def test_hashable(self):
        assert len({ChunkType.from_str("IDAT"), ChunkType(b"IDAT")}) == 1


class TestChunk:
    """Tests for chunk encoding and parsing."""

    def test_new_chunk(self):
        chunk = Chunk(ChunkType.from_str("RuSt"), MESSAGE)
        assert chunk.length == 42
        assert chunk.crc == MESSAGE_CRC
        assert chunk.as_bytes() == raw_chunk()

    def test_from_bytes(self):
        chunk = Chunk.from_bytes(raw_chunk())
        assert chunk.length == 42
        assert str(chunk.chunk_type) == "RuSt"
        assert chunk.data_as_string() == MESSAGE.decode()
        assert chunk.crc == MESSAGE_CRC

    def test_round_trip(self):
        chunk = Chunk(ChunkType.from_str("teXt"), b"\x00\x01\xffpayload")
        assert Chunk.from_bytes(chunk.as_bytes()) == chunk

    def test_empty_data(self):
        chunk = Chunk(ChunkType.from_str("IEND"))
        assert chunk.as_bytes() == b"\x00\x00\x00\x00IEND\xaeB`\x82"

    def test_invalid_crc(self):
        with pytest.raises(CrcMismatchError, match="CRC"):
            Chunk.from_bytes(raw_chunk(crc=MESSAGE_CRC - 1))

    def test_truncated(self):
        data = raw_chunk()
        with pytest.raises(PngFormatError, match="Truncated"):
            Chunk.from_bytes(data[:-1])
        with pytest.raises(PngFormatError, match="Truncated"):
            Chunk.from_bytes(data[:8])

    def test_trailing_bytes(self):
        with pytest.raises(PngFormatError, match="trailing"):
            Chunk.from_bytes(raw_chunk() + b"\x00")

    def test_invalid_type_bytes(self):
        with pytest.raises(ChunkTypeError):
            Chunk.from_bytes(raw_chunk(chunk_type=b"Ru1t"))

    def test_any_single_byte_corruption_is_detected(self):
        data = raw_chunk()
        for i in range(len(data)):
            corrupted = bytearray(data)
            corrupted[i] ^= 0x01
            with pytest.raises(PngFormatError):
                Chunk.from_bytes(bytes(corrupted))

    def test_read_returns_next_offset(self):
        first = Chunk(ChunkType.from_str("abCd"), b"12")
        second = Chunk(ChunkType.from_str("efGh"), b"")
        buffer = first.as_bytes() + second.as_bytes()

        chunk, offset = Chunk.read(buffer)
        assert chunk == first
        assert offset == 14
        chunk, offset = Chunk.read(buffer, offset)
        assert chunk == second
        assert offset == len(buffer)


class TestEncodePng:
    """Tests for the file-level PNG structure."""

    def test_structure(self):
        pixels = np.zeros((2, 3, 3), dtype=np.uint8)
        data = encode_png(pixels)
        assert data.startswith(PNG_SIGNATURE)

        chunks = read_chunks(data)
        assert [str(c.chunk_type) for c in chunks] == ["IHDR", "IDAT", "IEND"]
        assert struct.unpack(">IIBBBBB", chunks[0].data) == (3, 2, 8, 2, 0, 0, 0)
        assert chunks[2].length == 0

    def test_idat_holds_filtered_scanlines(self):
        pixels = np.arange(2 * 2 * 3, dtype=np.uint8).reshape(2, 2, 3)
        idat = read_chunks(encode_png(pixels))[1]
        raw = zlib.decompress(idat.data)
        assert raw == b"\x00" + bytes(range(0, 6)) + b"\x00" + bytes(range(6, 12))

    def test_bad_signature(self):
        with pytest.raises(PngFormatError, match="signature"):
            read_chunks(b"GIF89a" + b"\x00" * 20)

    def test_corrupted_idat_detected(self):
        data = bytearray(encode_png(np.full((4, 4, 3), 200, dtype=np.uint8)))
        # First IDAT data byte: signature, IHDR chunk (25 bytes), IDAT length and type
        data[8 + 25 + 8] ^= 0xFF
        with pytest.raises(CrcMismatchError):
            read_chunks(bytes(data))
