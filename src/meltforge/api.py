"""Public file-based conversion API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from typing import Optional

from meltforge.application.use_cases import build_conversion_job
from meltforge.application.use_cases import build_encode_options
from meltforge.application.use_cases import convert_job
from meltforge.formats import ImageFormat
from meltforge.formats import parse_target_format
from meltforge.plugins.registry import create_default_registry
from meltforge.types import PathLike


def convert_image_file(
    input_path: PathLike,
    target_format: ImageFormat | str | None,
    output_path: Optional[PathLike] = None,
    *,
    jpeg_quality: int = 90,
    optimize: bool = False,
    codec_modules: Optional[Iterable[str]] = None,
) -> Path:
    """Convert an image file between PNG and JPEG.

    A string target token is parsed before the pipeline runs, so an unknown or
    missing token is rejected without touching the filesystem. An already
    parsed ``ImageFormat`` is used as-is.

    Returns
    -------
    Path
        Path of the written image.
    """
    if isinstance(target_format, ImageFormat):
        image_format = target_format
    else:
        image_format = parse_target_format(target_format)
    job = build_conversion_job(
        input_path=input_path,
        target_format=image_format,
        output_path=output_path,
    )
    options = build_encode_options(jpeg_quality=jpeg_quality, optimize=optimize)
    registry = create_default_registry(extra_modules=codec_modules)
    result = convert_job(job, options=options, codecs=registry)
    return result.output_path
