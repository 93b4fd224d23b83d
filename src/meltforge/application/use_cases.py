"""Application use-cases orchestrating conversion workflows."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from meltforge.application.options import EncodeOptions
from meltforge.application.ports import CodecResolver, JobValidator
from meltforge.application.results import ConversionJob, ConversionResult
from meltforge.application.validation import validate_job
from meltforge.errors import (
    ConversionExecutionFailed,
    InvalidArgument,
    OutputWriteFailed,
    PathAlreadyExists,
    PermissionDenied,
    UnsupportedOutputFormat,
    WriteError,
)
from meltforge.formats import ImageFormat, format_from_extension, is_convertible_pair
from meltforge.plugins.registry import create_default_registry
from meltforge.schemas import ConversionJobConfig, EncodeOptionsConfig
from meltforge.types import PathLike, RgbColor

logger = logging.getLogger(__name__)


def build_conversion_job(
    *,
    input_path: PathLike,
    target_format: ImageFormat,
    output_path: PathLike | None = None,
) -> ConversionJob:
    """Build an immutable job from raw path values."""
    try:
        config = ConversionJobConfig(input_path=input_path, output_path=output_path)
    except ValidationError as exc:
        raise InvalidArgument(f"invalid conversion paths: {exc}") from exc
    return ConversionJob(
        input_path=config.input_path,
        target_format=target_format,
        output_path=config.output_path,
    )


def build_encode_options(
    *,
    jpeg_quality: int = 90,
    optimize: bool = False,
    background: RgbColor = (255, 255, 255),
) -> EncodeOptions:
    """Build typed encoder options from command/API params."""
    try:
        config = EncodeOptionsConfig(
            jpeg_quality=jpeg_quality,
            optimize=optimize,
            background=background,
        )
    except ValidationError as exc:
        raise InvalidArgument(f"invalid encoder options: {exc}") from exc
    return EncodeOptions(
        jpeg_quality=config.jpeg_quality,
        optimize=config.optimize,
        background=config.background,
    )


def resolve_output_path(job: ConversionJob) -> Path:
    """Return the explicit output path, or derive one from the input path."""
    if job.output_path is not None:
        return job.output_path
    return job.input_path.with_suffix(f".{job.target_format.canonical_extension}")


def ensure_parent_directory(path: Path) -> None:
    """Create all missing parent directories of ``path``.

    Raises
    ------
    PermissionDenied
        If the OS refuses to create a directory.
    WriteError
        If a path component is not a directory or creation fails otherwise.
    """
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except PermissionError as exc:
        raise PermissionDenied(parent) from exc
    except OSError as exc:
        raise WriteError(parent, f"Write error: cannot create directory {parent}: {exc}") from exc


def convert_job(
    job: ConversionJob,
    *,
    options: EncodeOptions | None = None,
    codecs: CodecResolver | None = None,
    validator: JobValidator = validate_job,
) -> ConversionResult:
    """Use-case: validate a job, then decode and re-encode the image.

    Parameters
    ----------
    job : ConversionJob
        Conversion request.
    options : EncodeOptions | None, optional
        Encoder settings; defaults to ``EncodeOptions()``.
    codecs : CodecResolver | None, optional
        Codec lookup; defaults to the built-in registry.
    validator : JobValidator, optional
        Validation routine run before any filesystem write.

    Returns
    -------
    ConversionResult
        Final output path and detected formats.

    Notes
    -----
    Validation and the final write are not atomic with respect to each other.
    The encoder opens the destination in exclusive-create mode, so a file that
    appears in between is reported as ``PathAlreadyExists`` instead of being
    overwritten.
    """
    validator(job)

    options = options or EncodeOptions()
    codecs = codecs or create_default_registry()

    output_path = resolve_output_path(job)
    logger.debug("resolved output path %s for %s", output_path, job.input_path)
    ensure_parent_directory(output_path)

    source_format = format_from_extension(job.input_path)
    target_format = job.target_format
    if not is_convertible_pair(source_format, target_format):
        raise UnsupportedOutputFormat(str(source_format), str(target_format))
    if output_path.exists():
        raise PathAlreadyExists(output_path)

    decoder = codecs.get(source_format)
    encoder = codecs.get(target_format)
    logger.debug("dispatch %s -> %s", source_format, target_format)

    try:
        image = decoder.decode(job.input_path)
    except Exception as exc:
        raise ConversionExecutionFailed(job.input_path, exc) from exc

    try:
        encoder.encode(image, output_path, options)
    except FileExistsError as exc:
        raise PathAlreadyExists(output_path) from exc
    except Exception as exc:
        partial = output_path.exists()
        if partial:
            logger.warning("encoder left a partial file at %s", output_path)
        raise OutputWriteFailed(output_path, exc, partial_output=partial) from exc

    return ConversionResult(
        output_path=output_path,
        source_path=job.input_path,
        source_format=source_format,
        target_format=target_format,
        derived_output=job.output_path is None,
    )
