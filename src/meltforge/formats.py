"""Supported image formats and extension classification."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from meltforge.errors import (
    MissingTargetFormat,
    UnsupportedInputFormat,
    UnsupportedTargetFormat,
)

NO_EXTENSION = "<no extension>"


class ImageFormat(Enum):
    """Closed set of formats the converter handles."""

    PNG = "png"
    JPEG = "jpeg"

    @property
    def canonical_extension(self) -> str:
        """Extension used when deriving an output path."""
        return _CANONICAL_EXTENSIONS[self]

    @property
    def extensions(self) -> tuple[str, ...]:
        """All extensions (without dot) that identify this format."""
        return tuple(ext for ext, fmt in _EXTENSIONS.items() if fmt is self)

    @property
    def pillow_format(self) -> str:
        """Format name understood by ``PIL.Image.save``."""
        return self.name

    def __str__(self) -> str:
        return self.name


_EXTENSIONS: dict[str, ImageFormat] = {
    "png": ImageFormat.PNG,
    "jpg": ImageFormat.JPEG,
    "jpeg": ImageFormat.JPEG,
}

_CANONICAL_EXTENSIONS: dict[ImageFormat, str] = {
    ImageFormat.PNG: "png",
    ImageFormat.JPEG: "jpg",
}

# Input first, requested output second.
_CONVERTIBLE_PAIRS: frozenset[tuple[ImageFormat, ImageFormat]] = frozenset(
    {
        (ImageFormat.PNG, ImageFormat.JPEG),
        (ImageFormat.JPEG, ImageFormat.PNG),
    }
)


def format_from_extension(path: Path) -> ImageFormat:
    """Classify a path by its extension.

    Parameters
    ----------
    path : Path
        File path whose suffix is inspected (case-insensitively).

    Returns
    -------
    ImageFormat
        Detected format.

    Raises
    ------
    UnsupportedInputFormat
        If the extension is missing or not recognized.
    """
    suffix = Path(path).suffix
    if not suffix:
        raise UnsupportedInputFormat(NO_EXTENSION, Path(path))
    extension = suffix[1:].lower()
    try:
        return _EXTENSIONS[extension]
    except KeyError as exc:
        raise UnsupportedInputFormat(extension, Path(path)) from exc


def is_convertible_pair(input_format: ImageFormat, output_format: ImageFormat) -> bool:
    """Return ``True`` only for PNG -> JPEG and JPEG -> PNG.

    Same-format requests are never convertible.
    """
    return (input_format, output_format) in _CONVERTIBLE_PAIRS


def parse_target_format(token: str | None) -> ImageFormat:
    """Parse a user-supplied target format token.

    Parameters
    ----------
    token : str | None
        ``"png"``, ``"jpg"`` or ``"jpeg"`` in any case.

    Returns
    -------
    ImageFormat
        Requested output format.

    Raises
    ------
    MissingTargetFormat
        If no token (or a blank one) was given.
    UnsupportedTargetFormat
        If the token names an unknown format.
    """
    if token is None or not token.strip():
        raise MissingTargetFormat()
    try:
        return _EXTENSIONS[token.strip().lower()]
    except KeyError as exc:
        raise UnsupportedTargetFormat(token) from exc


def supported_formats() -> list[ImageFormat]:
    """Return supported formats in declaration order."""
    return list(ImageFormat)


def supported_pairs() -> list[tuple[ImageFormat, ImageFormat]]:
    """Return convertible (input, output) pairs, sorted by input name."""
    return sorted(_CONVERTIBLE_PAIRS, key=lambda pair: (pair[0].name, pair[1].name))
