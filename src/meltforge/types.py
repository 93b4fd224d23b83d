"""Shared type aliases and protocols for the conversion pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

type PathLike = str | Path
type RgbColor = tuple[int, int, int]


class DecodedImage(Protocol):
    """Marker protocol for in-memory decoded images (``PIL.Image.Image``)."""

    mode: str
