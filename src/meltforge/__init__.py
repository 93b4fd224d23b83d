"""Top-level API for PNG/JPEG image conversion."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from meltforge.types import PathLike

__version__ = "0.1.0"


def convert_image(
    input_path: PathLike,
    target_format: str,
    output_path: PathLike | None = None,
    *,
    jpeg_quality: int = 90,
    optimize: bool = False,
    codec_modules: Iterable[str] | None = None,
) -> Path:
    """Convert a PNG image to JPEG or a JPEG image to PNG.

    Parameters
    ----------
    input_path : str | Path
        Source image; its extension selects the input format.
    target_format : str
        ``"png"``, ``"jpg"`` or ``"jpeg"`` (case-insensitive).
    output_path : str | Path | None, default=None
        Destination. When omitted, defaults to ``input_path`` with the
        target format's canonical extension (``.png`` / ``.jpg``).
    jpeg_quality : int, default=90
        JPEG encoder quality (1-95).
    optimize : bool, default=False
        Ask the encoder for an extra optimization pass.
    codec_modules : Iterable[str] | None, optional
        Extra codec plugin modules (import path or file path).

    Returns
    -------
    Path
        Path to the written image.

    Raises
    ------
    meltforge.errors.MeltforgeError
        Categorized failure; ``exc.exit_code`` gives the process exit code.
    """
    from .api import convert_image_file as _impl

    return _impl(
        input_path=input_path,
        target_format=target_format,
        output_path=output_path,
        jpeg_quality=jpeg_quality,
        optimize=optimize,
        codec_modules=codec_modules,
    )


__all__ = ["convert_image"]
