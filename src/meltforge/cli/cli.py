#!/usr/bin/env python3
"""
meltforge.cli.cli

Typer-based CLI for converting images between PNG and JPEG.

Exit codes are stable per failure category so scripts can branch on them:
0 success, 2 input, 3 format, 4 conversion, 5 filesystem, 1 unexpected.

Examples
--------
Derive the output path (``photo.jpg``):

    meltforge convert photo.png --to jpg

Write to an explicit path, creating missing directories:

    meltforge convert photo.jpg --to PNG -o out/result.png
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer

from meltforge.errors import PluginError, exit_code_for

app = typer.Typer(
    name="meltforge",
    help="Convert images between PNG and JPEG.",
    no_args_is_help=True,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    """Route library log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _print_conversion_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly conversion error.

    Parameters
    ----------
    exc : Exception
        Exception raised during conversion.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.echo(f"✗ {type(exc).__name__}: {exc}", err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    return exit_code_for(exc)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to log pipeline steps.
    """
    _configure_logging(verbose)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Path to a .png/.jpg/.jpeg image."),
    to: str | None = typer.Option(
        None, "--to", "-t", metavar="FORMAT", help="Target format: png, jpg or jpeg."
    ),
    output_path: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the result. Defaults to the input path with the new extension.",
    ),
    jpeg_quality: int = typer.Option(
        90,
        "--quality",
        envvar="MELTFORGE_JPEG_QUALITY",
        help="JPEG quality (1-95).",
    ),
    optimize: bool = typer.Option(False, "--optimize", help="Run the encoder's optimization pass."),
    verify: bool = typer.Option(
        False, "--verify", help="Re-open the written file and check that it decodes."
    ),
    codec_module: list[str] | None = typer.Option(
        None,
        "--codec-module",
        help="Codec plugin module import path or file path (repeatable).",
    ),
) -> None:
    """Convert a PNG image to JPEG, or a JPEG image to PNG.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    input_path : Path
        Source image.
    to : str | None
        Target format token.
    output_path : Path | None
        Explicit destination; must not exist.

    Notes
    -----
    - Existing files are never overwritten.
    - Same-format requests (png -> png) are rejected.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    try:
        from meltforge.api import convert_image_file
        from meltforge.formats import parse_target_format
        from meltforge.verify import verify_output_if_requested

        target_format = parse_target_format(to)
        out = convert_image_file(
            input_path=input_path,
            target_format=target_format,
            output_path=output_path,
            jpeg_quality=jpeg_quality,
            optimize=optimize,
            codec_modules=codec_module or None,
        )
        verify_output_if_requested(out, target_format, verify)
        typer.echo(f"✓ Saved: {out}")
    except Exception as exc:
        # Pipeline errors carry their category exit code; anything else exits 1.
        raise typer.Exit(code=_print_conversion_error(exc, debug))


@app.command("formats")
def formats_cmd() -> None:
    """List supported formats, their extensions, and conversion pairs."""
    from meltforge.formats import supported_formats, supported_pairs

    for image_format in supported_formats():
        typer.echo(f"{image_format.name}: {', '.join(image_format.extensions)}")
    typer.echo("conversions:")
    for source, target in supported_pairs():
        typer.echo(f"  {source.name} -> {target.name}")


@app.command("doctor")
def doctor_cmd(
    codec_module: list[str] | None = typer.Option(
        None,
        "--codec-module",
        help="Codec plugin module to load before listing codecs (repeatable).",
    ),
) -> None:
    """Print installed toolchain versions and registered codecs."""
    import importlib.metadata as metadata

    from meltforge import __version__

    typer.echo(f"Python: {sys.version.split()[0]}")
    typer.echo(f"meltforge: {__version__}")
    for distribution in ("Pillow", "pydantic", "typer"):
        try:
            typer.echo(f"{distribution}: {metadata.version(distribution)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{distribution}: <not installed>")

    from meltforge.plugins.registry import create_default_registry

    try:
        registry = create_default_registry(extra_modules=codec_module)
    except PluginError as exc:
        typer.echo(f"codecs: <unavailable> ({exc})")
        raise typer.Exit(code=exc.exit_code)
    for image_format in registry.formats():
        typer.echo(f"codec {image_format.name}: {registry.get(image_format).name}")


if __name__ == "__main__":
    app()
