"""Ordered, fail-fast validation of conversion jobs.

Each check is an independent callable over a :class:`ConversionJob`. The
default validator runs them in the order of :data:`DEFAULT_CHECKS` and stops
at the first failure.

The output-location check writes a probe file (prefix
``.meltforge-probe-``) into the nearest existing directory of an explicit
output path and removes it immediately. No other check touches the
filesystem beyond reading.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Sequence
from pathlib import Path

from meltforge.application.ports import JobCheck
from meltforge.application.results import ConversionJob
from meltforge.errors import (
    MissingInputFile,
    MissingParentDirectory,
    PathAlreadyExists,
    PermissionDenied,
    ReadError,
    UnsupportedOutputFormat,
)
from meltforge.formats import format_from_extension, is_convertible_pair

logger = logging.getLogger(__name__)

PROBE_PREFIX = ".meltforge-probe-"


def check_input_exists(job: ConversionJob) -> None:
    """Require the input path to name an existing regular file."""
    if not job.input_path.is_file():
        raise MissingInputFile(job.input_path)


def check_input_readable(job: ConversionJob) -> None:
    """Require the input file to be openable for reading."""
    try:
        with job.input_path.open("rb"):
            pass
    except PermissionError as exc:
        raise PermissionDenied(job.input_path) from exc
    except OSError as exc:
        raise ReadError(job.input_path, exc.strerror or exc) from exc


def check_input_format(job: ConversionJob) -> None:
    """Require a recognized input extension."""
    format_from_extension(job.input_path)


def check_pair_compatible(job: ConversionJob) -> None:
    """Require the (input, target) pair to be a supported conversion."""
    input_format = format_from_extension(job.input_path)
    if not is_convertible_pair(input_format, job.target_format):
        raise UnsupportedOutputFormat(str(input_format), str(job.target_format))


def check_output_location(job: ConversionJob) -> None:
    """Require an explicit output path to be new and writable.

    Derived output paths are skipped. A missing parent directory is accepted
    when its nearest existing ancestor is a writable directory, since the
    orchestrator creates intermediate directories before writing.
    """
    output_path = job.output_path
    if output_path is None:
        return
    if output_path.exists() or output_path.is_symlink():
        raise PathAlreadyExists(output_path)

    directory = nearest_existing_directory(output_path.parent)
    if directory is None:
        raise MissingParentDirectory(output_path.parent)
    probe_directory(directory)


def nearest_existing_directory(path: Path) -> Path | None:
    """Walk up from ``path`` to the first existing ancestor.

    Returns
    -------
    Path | None
        The ancestor if it is a directory, ``None`` if it is something else.
    """
    candidate = path
    while not candidate.exists():
        if candidate.parent == candidate:
            break
        candidate = candidate.parent
    return candidate if candidate.is_dir() else None


def probe_directory(directory: Path) -> None:
    """Create and remove a probe file to prove ``directory`` is writable.

    Raises
    ------
    PermissionDenied
        If the probe file cannot be created.
    """
    try:
        with tempfile.NamedTemporaryFile(dir=directory, prefix=PROBE_PREFIX):
            pass
    except OSError as exc:
        raise PermissionDenied(directory) from exc


DEFAULT_CHECKS: tuple[JobCheck, ...] = (
    check_input_exists,
    check_input_readable,
    check_input_format,
    check_pair_compatible,
    check_output_location,
)


def validate_job(job: ConversionJob, checks: Sequence[JobCheck] = DEFAULT_CHECKS) -> None:
    """Run ``checks`` in order, raising the first failure unchanged."""
    for check in checks:
        logger.debug("validate %s: %s", job.input_path, getattr(check, "__name__", check))
        check(job)
