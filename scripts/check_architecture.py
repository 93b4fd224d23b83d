#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/meltforge"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    # Pixel work belongs to codec plugins; the CLI and use-cases stay codec-agnostic.
    _assert_no_imports(PACKAGE / "cli/cli.py", ["from PIL", "import PIL"])

    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "import typer",
                "from typer",
                "from PIL",
                "import PIL",
            ],
        )

    for name in ("formats.py", "errors.py"):
        _assert_no_imports(PACKAGE / name, ["meltforge.application", "meltforge.plugins"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
