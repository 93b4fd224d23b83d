"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from meltforge.application.options import EncodeOptions
from meltforge.application.ports import CodecResolver, ImageCodec, JobCheck, JobValidator
from meltforge.application.results import ConversionJob, ConversionResult
from meltforge.formats import ImageFormat
from meltforge.types import PathLike, RgbColor


def build_conversion_job(
    *,
    input_path: PathLike,
    target_format: ImageFormat,
    output_path: PathLike | None = None,
) -> ConversionJob:
    """Build a conversion job via lazy use-case import."""
    from meltforge.application.use_cases import build_conversion_job as _impl

    return _impl(
        input_path=input_path,
        target_format=target_format,
        output_path=output_path,
    )


def build_encode_options(
    *,
    jpeg_quality: int = 90,
    optimize: bool = False,
    background: RgbColor = (255, 255, 255),
) -> EncodeOptions:
    """Build typed encoder options via lazy use-case import."""
    from meltforge.application.use_cases import build_encode_options as _impl

    return _impl(jpeg_quality=jpeg_quality, optimize=optimize, background=background)


def convert_job(
    job: ConversionJob,
    *,
    options: EncodeOptions | None = None,
    codecs: CodecResolver | None = None,
) -> ConversionResult:
    """Validate and convert a job via lazy use-case import."""
    from meltforge.application.use_cases import convert_job as _impl

    return _impl(job, options=options, codecs=codecs)


def validate_job(job: ConversionJob) -> None:
    """Run the default ordered checks via lazy import."""
    from meltforge.application.validation import validate_job as _impl

    _impl(job)


def resolve_output_path(job: ConversionJob) -> Path:
    """Resolve the destination path via lazy use-case import."""
    from meltforge.application.use_cases import resolve_output_path as _impl

    return _impl(job)


__all__ = [
    "CodecResolver",
    "ConversionJob",
    "ConversionResult",
    "EncodeOptions",
    "ImageCodec",
    "JobCheck",
    "JobValidator",
    "build_conversion_job",
    "build_encode_options",
    "convert_job",
    "resolve_output_path",
    "validate_job",
]
