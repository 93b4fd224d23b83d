"""Application-layer request and result objects."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from meltforge.formats import ImageFormat


@dataclass(frozen=True)
class ConversionJob:
    """One conversion request.

    Parameters
    ----------
    input_path : Path
        Source image.
    target_format : ImageFormat
        Requested output format.
    output_path : Path | None, default=None
        Explicit destination. When omitted the destination is derived from
        ``input_path`` with the target's canonical extension.
    """

    input_path: Path
    target_format: ImageFormat
    output_path: Path | None = None


@dataclass(frozen=True)
class ConversionResult:
    """Structured conversion outcome."""

    output_path: Path
    source_path: Path
    source_format: ImageFormat
    target_format: ImageFormat
    derived_output: bool
