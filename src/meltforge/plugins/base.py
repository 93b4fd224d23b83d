"""Plugin protocol for image codecs."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from meltforge.application.options import EncodeOptions
from meltforge.formats import ImageFormat
from meltforge.types import DecodedImage


@runtime_checkable
class CodecPlugin(Protocol):
    """Protocol implemented by codec plugins."""

    name: str
    format: ImageFormat

    def decode(self, path: Path) -> DecodedImage:
        """Decode an image file fully into memory.

        Parameters
        ----------
        path : Path
            Source image in this plugin's format.

        Returns
        -------
        DecodedImage
            Loaded image; no file handle stays open.
        """

    def encode(self, image: DecodedImage, path: Path, options: EncodeOptions) -> None:
        """Encode an image into this plugin's format.

        Parameters
        ----------
        image : DecodedImage
            Image produced by any codec's ``decode``.
        path : Path
            Destination. Must not exist; implementations create it exclusively.
        options : EncodeOptions
            Encoder settings.
        """
