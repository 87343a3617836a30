"""Exception hierarchy for the path tracer.

Everything the package raises on bad input derives from ``PathTracerError``
so the CLI can report it without a traceback. Errors that describe a bad
value also derive from ``ValueError``.
"""


class PathTracerError(Exception):
    """Base class for all path tracer errors."""


class UnsupportedFormatError(PathTracerError, ValueError):
    """Raised when an output path names an image format we cannot write."""


class SceneConfigError(PathTracerError, ValueError):
    """Raised when a scene description is structurally invalid."""


class PngFormatError(PathTracerError, ValueError):
    """Raised when PNG bytes are malformed (bad signature, truncated data)."""


class ChunkTypeError(PngFormatError):
    """Raised when a chunk type code is not four ASCII letters."""


class CrcMismatchError(PngFormatError):
    """Raised when a chunk's stored CRC does not match its contents."""
