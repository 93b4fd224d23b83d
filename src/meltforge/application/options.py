"""Typed option objects shared across conversion use-cases."""

from __future__ import annotations

from dataclasses import dataclass

from meltforge.types import RgbColor


@dataclass(frozen=True)
class EncodeOptions:
    """Encoder settings passed to the target codec.

    ``background`` is the color transparent pixels are flattened onto when
    the target format has no alpha channel.
    """

    jpeg_quality: int = 90
    optimize: bool = False
    background: RgbColor = (255, 255, 255)
