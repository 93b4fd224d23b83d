"""Shared pytest configuration, marker assignment, and image fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


def write_image(path: Path, image_format: str, mode: str = "RGB") -> Path:
    """Write a small gradient image to ``path`` and return it."""
    image = Image.new(mode, (8, 6))
    for x in range(8):
        for y in range(6):
            if mode == "RGBA":
                image.putpixel((x, y), (x * 30, y * 40, 90, 0 if x < 4 else 255))
            elif mode == "L":
                image.putpixel((x, y), x * 30)
            else:
                image.putpixel((x, y), (x * 30, y * 40, 90))
    image.save(path, format=image_format)
    return path


@pytest.fixture
def image_factory() -> Callable[..., Path]:
    """Expose :func:`write_image` to tests that need custom images."""
    return write_image


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    """RGB PNG named ``photo.png``."""
    return write_image(tmp_path / "photo.png", "PNG")


@pytest.fixture
def jpeg_file(tmp_path: Path) -> Path:
    """RGB JPEG named ``photo.jpg``."""
    return write_image(tmp_path / "photo.jpg", "JPEG")


@pytest.fixture
def rgba_png_file(tmp_path: Path) -> Path:
    """Half-transparent PNG named ``alpha.png``."""
    return write_image(tmp_path / "alpha.png", "PNG", mode="RGBA")
