"""CRC-32 as used by PNG chunks (ISO 3309 / ITU-T V.42).

Table-driven implementation over the reflected polynomial ``0xEDB88320``,
initial value ``0xFFFFFFFF`` and a final bit inversion.
"""

from __future__ import annotations

POLYNOMIAL = 0xEDB88320


def _make_crc_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = POLYNOMIAL ^ (c >> 1)
            else:
                c >>= 1
        table.append(c)
    return tuple(table)


CRC_TABLE = _make_crc_table()


def update_crc(crc: int, data: bytes) -> int:
    """Feed ``data`` into a running (non-inverted) CRC register."""
    table = CRC_TABLE
    for byte in data:
        crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc


def crc32(data: bytes) -> int:
    """Compute the CRC-32 of ``data`` as an unsigned 32-bit integer."""
    return update_crc(0xFFFFFFFF, data) ^ 0xFFFFFFFF
