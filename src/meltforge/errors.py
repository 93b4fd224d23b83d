"""Categorized error taxonomy for the conversion pipeline.

Every failure raised by the core is a :class:`MeltforgeError`. The direct
subclass names the category (input, format, conversion, filesystem), which
maps to a stable process exit code; the leaf class and its attributes carry
the offending path, format string, or underlying cause.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import ClassVar


class ErrorCategory(Enum):
    """Failure classes with their process exit codes."""

    INPUT = 2
    FORMAT = 3
    CONVERSION = 4
    IO = 5

    @property
    def exit_code(self) -> int:
        """Return the process exit code for this category."""
        return self.value


UNEXPECTED_EXIT_CODE = 1


class MeltforgeError(Exception):
    """Base class for all pipeline failures."""

    category: ClassVar[ErrorCategory]

    @property
    def exit_code(self) -> int:
        """Return the exit code of this error's category."""
        return self.category.exit_code


# -----------------------------
# Input
# -----------------------------
class InputError(MeltforgeError):
    """Malformed or missing request inputs."""

    category = ErrorCategory.INPUT


class MissingInputFile(InputError):
    """Input path does not exist or is not a regular file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Missing input file: {path}")


class MissingTargetFormat(InputError):
    """No target format was supplied."""

    def __init__(self) -> None:
        super().__init__("Missing target format (--to)")


class InvalidArgument(InputError):
    """A request argument failed validation."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid argument: {detail}")


# -----------------------------
# Format
# -----------------------------
class FormatError(MeltforgeError):
    """Unsupported input/output format or conversion pair."""

    category = ErrorCategory.FORMAT


class UnsupportedInputFormat(FormatError):
    """Input extension does not map to a supported format."""

    def __init__(self, extension: str, path: Path | None = None) -> None:
        self.extension = extension
        self.path = path
        where = f" ({path})" if path is not None else ""
        super().__init__(f"Unsupported input format '{extension}'{where}")


class UnsupportedOutputFormat(FormatError):
    """Requested conversion pair is not supported."""

    def __init__(self, input_format: str, output_format: str) -> None:
        self.input_format = input_format
        self.output_format = output_format
        super().__init__(
            f"Unsupported output format: {input_format} -> {output_format} "
            "is not a supported conversion"
        )


class UnsupportedTargetFormat(FormatError):
    """Target format token is not recognized."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unsupported format: {token}")


# -----------------------------
# Conversion
# -----------------------------
class ConversionError(MeltforgeError):
    """Codec-level failure."""

    category = ErrorCategory.CONVERSION


class PluginError(ConversionError):
    """Codec plugin could not be loaded, registered, or resolved."""


class ConversionExecutionFailed(ConversionError):
    """Decoding the input (or checking the output) failed."""

    def __init__(self, path: Path, cause: object) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Execution failed for {path}: {cause}")


class OutputWriteFailed(ConversionError):
    """Encoding or writing the output failed."""

    def __init__(self, path: Path, cause: object, partial_output: bool = False) -> None:
        self.path = path
        self.cause = cause
        self.partial_output = partial_output
        message = f"Output write failed for {path}: {cause}"
        if partial_output:
            message += f" (partial file left at {path})"
        super().__init__(message)


# -----------------------------
# Filesystem
# -----------------------------
class FileSystemError(MeltforgeError):
    """Filesystem-level failure."""

    category = ErrorCategory.IO

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class ReadError(FileSystemError):
    """Input could not be opened for reading."""

    def __init__(self, path: Path, cause: object | None = None) -> None:
        self.cause = cause
        suffix = f": {cause}" if cause is not None else ""
        super().__init__(path, f"Read error: {path}{suffix}")


class PermissionDenied(FileSystemError):
    """Operating system refused access to a path."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Permission denied: {path}")


class WriteError(FileSystemError):
    """Output location is unusable."""

    def __init__(self, path: Path, message: str | None = None) -> None:
        super().__init__(path, message or f"Write error: {path}")


class PathAlreadyExists(WriteError):
    """Output path already exists; files are never overwritten."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Write error: output already exists: {path}")


class MissingParentDirectory(WriteError):
    """Output parent directory is missing and cannot be created."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, f"Write error: target directory not found: {path}")


def exit_code_for(exc: BaseException) -> int:
    """Map any exception to a process exit code.

    Parameters
    ----------
    exc : BaseException
        Exception raised while handling a request.

    Returns
    -------
    int
        Category exit code for pipeline errors, otherwise ``1``.
    """
    if isinstance(exc, MeltforgeError):
        return exc.exit_code
    return UNEXPECTED_EXIT_CODE
