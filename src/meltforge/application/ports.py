"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from meltforge.application.options import EncodeOptions
from meltforge.application.results import ConversionJob
from meltforge.formats import ImageFormat
from meltforge.types import DecodedImage


class JobCheck(Protocol):
    """Single validation step over a conversion job."""

    def __call__(self, job: ConversionJob) -> None:
        """Raise a ``MeltforgeError`` when the job violates this check."""


class JobValidator(Protocol):
    """Run every validation step for a job."""

    def __call__(self, job: ConversionJob) -> None:
        """Raise on the first failing check."""


class ImageCodec(Protocol):
    """Decode and encode images of one format."""

    def decode(self, path: Path) -> DecodedImage:
        """Decode the whole file into memory."""

    def encode(self, image: DecodedImage, path: Path, options: EncodeOptions) -> None:
        """Encode image and write it to a new file at path."""


class CodecResolver(Protocol):
    """Look up the codec registered for a format."""

    def get(self, image_format: ImageFormat) -> ImageCodec:
        """Return codec for format."""
