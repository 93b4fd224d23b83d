"""Unit tests for the ordered job validation checks."""

from __future__ import annotations

from pathlib import Path

import pytest

from meltforge.application import validation
from meltforge.application.results import ConversionJob
from meltforge.application.validation import (
    DEFAULT_CHECKS,
    PROBE_PREFIX,
    check_input_exists,
    check_input_format,
    check_input_readable,
    check_output_location,
    check_pair_compatible,
    nearest_existing_directory,
    validate_job,
)
from meltforge.errors import (
    MissingInputFile,
    MissingParentDirectory,
    PathAlreadyExists,
    PermissionDenied,
    ReadError,
    UnsupportedInputFormat,
    UnsupportedOutputFormat,
)
from meltforge.formats import ImageFormat


def _job(
    input_path: Path,
    target: ImageFormat = ImageFormat.JPEG,
    output_path: Path | None = None,
) -> ConversionJob:
    return ConversionJob(input_path=input_path, target_format=target, output_path=output_path)


def test_default_checks_run_in_documented_order() -> None:
    """Keep existence, readability, format, pair, output order."""
    assert DEFAULT_CHECKS == (
        check_input_exists,
        check_input_readable,
        check_input_format,
        check_pair_compatible,
        check_output_location,
    )


def test_missing_input_is_rejected(tmp_path: Path) -> None:
    """Reject nonexistent input paths."""
    with pytest.raises(MissingInputFile) as info:
        check_input_exists(_job(tmp_path / "missing.png"))
    assert info.value.path == tmp_path / "missing.png"


def test_directory_input_is_rejected(tmp_path: Path) -> None:
    """Reject directories even when named like an image."""
    folder = tmp_path / "folder.png"
    folder.mkdir()
    with pytest.raises(MissingInputFile):
        check_input_exists(_job(folder))


def test_readability_maps_permission_error(
    monkeypatch: pytest.MonkeyPatch, png_file: Path
) -> None:
    """Distinguish permission problems from generic read failures."""

    def deny(self: Path, *args: object, **kwargs: object) -> object:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "open", deny)
    with pytest.raises(PermissionDenied) as info:
        check_input_readable(_job(png_file))
    assert info.value.path == png_file


def test_readability_maps_other_os_errors(
    monkeypatch: pytest.MonkeyPatch, png_file: Path
) -> None:
    """Map other OSErrors to ReadError."""

    def fail(self: Path, *args: object, **kwargs: object) -> object:
        raise OSError(5, "Input/output error")

    monkeypatch.setattr(Path, "open", fail)
    with pytest.raises(ReadError, match="Input/output error"):
        check_input_readable(_job(png_file))


def test_unsupported_input_extension(tmp_path: Path) -> None:
    """Name the offending extension."""
    doc = tmp_path / "doc.txt"
    doc.write_text("hello")
    with pytest.raises(UnsupportedInputFormat, match="txt"):
        check_input_format(_job(doc, ImageFormat.PNG))


def test_same_format_pair_is_rejected(png_file: Path) -> None:
    """Reject PNG -> PNG requests."""
    with pytest.raises(UnsupportedOutputFormat) as info:
        check_pair_compatible(_job(png_file, ImageFormat.PNG))
    assert (info.value.input_format, info.value.output_format) == ("PNG", "PNG")


def test_output_check_skipped_for_derived_paths(
    monkeypatch: pytest.MonkeyPatch, png_file: Path
) -> None:
    """Only explicit output paths are probed."""
    monkeypatch.setattr(
        validation,
        "probe_directory",
        lambda _directory: pytest.fail("probe should not run"),
    )
    check_output_location(_job(png_file))


def test_existing_output_is_rejected_and_untouched(png_file: Path, tmp_path: Path) -> None:
    """Never accept an output path that already exists."""
    existing = tmp_path / "existing.jpg"
    existing.write_bytes(b"keep me")
    with pytest.raises(PathAlreadyExists):
        check_output_location(_job(png_file, output_path=existing))
    assert existing.read_bytes() == b"keep me"


def test_missing_parent_is_accepted_when_creatable(png_file: Path, tmp_path: Path) -> None:
    """Accept nested missing directories under a writable ancestor."""
    check_output_location(_job(png_file, output_path=tmp_path / "out" / "deep" / "r.jpg"))
    assert not (tmp_path / "out").exists()


def test_parent_blocked_by_file_is_rejected(png_file: Path, tmp_path: Path) -> None:
    """Reject outputs whose nearest existing ancestor is a regular file."""
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    with pytest.raises(MissingParentDirectory):
        check_output_location(_job(png_file, output_path=blocker / "sub" / "r.jpg"))


def test_probe_failure_maps_to_permission_denied(
    monkeypatch: pytest.MonkeyPatch, png_file: Path, tmp_path: Path
) -> None:
    """Report unwritable output directories as PermissionDenied."""

    def deny(*args: object, **kwargs: object) -> object:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(validation.tempfile, "NamedTemporaryFile", deny)
    with pytest.raises(PermissionDenied) as info:
        check_output_location(_job(png_file, output_path=tmp_path / "r.jpg"))
    assert info.value.path == tmp_path


def test_probe_file_is_removed(png_file: Path, tmp_path: Path) -> None:
    """Leave no probe file behind after a successful check."""
    check_output_location(_job(png_file, output_path=tmp_path / "r.jpg"))
    assert not list(tmp_path.glob(f"{PROBE_PREFIX}*"))


def test_nearest_existing_directory(tmp_path: Path) -> None:
    """Walk up to the first existing ancestor."""
    assert nearest_existing_directory(tmp_path / "a" / "b") == tmp_path
    assert nearest_existing_directory(tmp_path) == tmp_path


def test_validate_job_stops_at_first_failure(tmp_path: Path) -> None:
    """Short-circuit: later checks never run after a failure."""
    calls: list[str] = []

    def first(job: ConversionJob) -> None:
        calls.append("first")
        raise MissingInputFile(job.input_path)

    def second(job: ConversionJob) -> None:
        calls.append("second")

    with pytest.raises(MissingInputFile):
        validate_job(_job(tmp_path / "x.png"), checks=(first, second))
    assert calls == ["first"]


def test_validate_job_reports_missing_before_format(tmp_path: Path) -> None:
    """A missing file with a bad extension fails on existence first."""
    with pytest.raises(MissingInputFile):
        validate_job(_job(tmp_path / "missing.txt"))


def test_validate_job_accepts_valid_request(png_file: Path, tmp_path: Path) -> None:
    """Pass a fully valid request without raising."""
    validate_job(_job(png_file, ImageFormat.JPEG, tmp_path / "out" / "photo.jpg"))
