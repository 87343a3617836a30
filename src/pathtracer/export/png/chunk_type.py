"""PNG chunk type codes.

A chunk type is four ASCII letters. The case of each letter carries a
property bit (bit 5 of the byte):

    =========  ===================  ============================
    Position   Uppercase            Lowercase
    =========  ===================  ============================
    1st        critical             ancillary
    2nd        public               private
    3rd        reserved (valid)     reserved bit set (invalid)
    4th        unsafe to copy       safe to copy
    =========  ===================  ============================
"""

from __future__ import annotations

from pathtracer.errors import ChunkTypeError

TYPE_CODE_LENGTH = 4


def _is_letter(byte: int) -> bool:
    return 65 <= byte <= 90 or 97 <= byte <= 122


def _is_upper(byte: int) -> bool:
    return 65 <= byte <= 90


class ChunkType:
    """A validated four-letter PNG chunk type."""

    __slots__ = ("_code",)

    def __init__(self, code: bytes):
        """Create a chunk type from its four raw bytes.

        Args:
            code: Exactly four bytes, each an ASCII letter.

        Raises:
            ChunkTypeError: If the length is wrong or a byte is not a letter.
        """
        code = bytes(code)
        if len(code) != TYPE_CODE_LENGTH:
            raise ChunkTypeError("Type codes should be 4 bytes in length")
        if not all(_is_letter(b) for b in code):
            raise ChunkTypeError(
                "Type codes are restricted to consist of uppercase and lowercase "
                "ASCII letters (A-Z and a-z, or 65-90 and 97-122 decimal)"
            )
        self._code = code

    @classmethod
    def from_str(cls, name: str) -> ChunkType:
        """Create a chunk type from a string such as ``"IHDR"``."""
        if len(name) != TYPE_CODE_LENGTH:
            raise ChunkTypeError("Type codes should be 4 bytes in length")
        try:
            code = name.encode("ascii")
        except UnicodeEncodeError as err:
            raise ChunkTypeError(f"Type code {name!r} is not ASCII") from err
        return cls(code)

    def as_bytes(self) -> bytes:
        """Return the four raw type bytes."""
        return self._code

    @property
    def is_critical(self) -> bool:
        return _is_upper(self._code[0])

    @property
    def is_public(self) -> bool:
        return _is_upper(self._code[1])

    @property
    def is_reserved_bit_valid(self) -> bool:
        return _is_upper(self._code[2])

    @property
    def is_safe_to_copy(self) -> bool:
        return not _is_upper(self._code[3])

    @property
    def is_valid(self) -> bool:
        # Letters are checked on construction; only the reserved bit remains
        return self.is_reserved_bit_valid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self._code == other._code

    def __hash__(self) -> int:
        return hash(self._code)

    def __str__(self) -> str:
        return self._code.decode("ascii")

    def __repr__(self) -> str:
        return f"ChunkType({str(self)!r})"


IHDR = ChunkType(b"IHDR")
IDAT = ChunkType(b"IDAT")
IEND = ChunkType(b"IEND")
