"""Output format dispatch by file extension."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from collections.abc import Callable

import numpy as np
import numpy.typing as npt

from pathtracer.errors import UnsupportedFormatError
from pathtracer.export.bmp import encode_bmp
from pathtracer.export.color import to_rgb8
from pathtracer.export.png import encode_png
from pathtracer.export.ppm import encode_ppm

logger = logging.getLogger(__name__)


class ImageFormat(Enum):
    """Supported output formats, valued by their file extension."""

    PPM = "ppm"
    BMP = "bmp"
    PNG = "png"

    @property
    def encoder(self) -> Callable[[npt.NDArray[np.uint8]], bytes]:
        return _ENCODERS[self]


_ENCODERS = {
    ImageFormat.PPM: encode_ppm,
    ImageFormat.BMP: encode_bmp,
    ImageFormat.PNG: encode_png,
}


def resolve_format(path: str | Path) -> ImageFormat:
    """Pick the output format for ``path`` from its extension.

    The extension is matched case-insensitively. A path without an extension
    falls back to PPM with a warning.

    Raises:
        UnsupportedFormatError: If the extension is not ppm, bmp or png.
    """
    suffix = Path(path).suffix
    if not suffix:
        logger.warning("No file extension on %s, writing PPM", path)
        return ImageFormat.PPM

    try:
        return ImageFormat(suffix[1:].lower())
    except ValueError as err:
        supported = ", ".join(f".{fmt.value}" for fmt in ImageFormat)
        raise UnsupportedFormatError(
            f"Unsupported image format {suffix!r} for {path} (expected one of {supported})"
        ) from err


def save_image(
    path: str | Path,
    image: npt.ArrayLike,
    image_format: ImageFormat | None = None,
) -> Path:
    """Convert a linear color image to 8 bits and write it to ``path``.

    Args:
        path: Destination file.
        image: Linear colors of shape (H, W, 3), row 0 at the top.
        image_format: Explicit format; resolved from the extension if None.

    Returns:
        The path written.
    """
    path = Path(path)
    if image_format is None:
        image_format = resolve_format(path)

    data = image_format.encoder(to_rgb8(image))
    path.write_bytes(data)
    logger.info("Wrote %s image to %s (%d bytes)", image_format.name, path, len(data))
    return path
