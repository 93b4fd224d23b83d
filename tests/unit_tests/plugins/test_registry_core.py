"""Unit tests for codec registry resolution and module loading helpers."""

from __future__ import annotations

import types
from pathlib import Path

import pytest

from meltforge.errors import PluginError
from meltforge.formats import ImageFormat
from meltforge.plugins.builtins import JpegCodec, PngCodec
from meltforge.plugins.registry import (
    CodecRegistry,
    _import_module_or_path,
    _register_from_module,
    create_default_registry,
)


class _Codec:
    """Simple codec test double."""

    def __init__(self, name: str, image_format: object = ImageFormat.PNG) -> None:
        self.name = name
        self.format = image_format

    def decode(self, path: Path) -> object:
        return path

    def encode(self, image: object, path: Path, options: object) -> None:
        del image, path, options


def test_register_requires_non_empty_name() -> None:
    """Reject codecs without a non-empty name."""
    registry = CodecRegistry()
    with pytest.raises(PluginError, match="non-empty 'name'"):
        registry.register(_Codec(name="  "))


def test_register_requires_image_format() -> None:
    """Reject codecs whose format is not an ImageFormat member."""
    registry = CodecRegistry()
    with pytest.raises(PluginError, match="must declare 'format'"):
        registry.register(_Codec(name="gif", image_format="gif"))


def test_get_unknown_format_raises() -> None:
    """Raise a clear error when no codec handles a format."""
    registry = CodecRegistry()
    with pytest.raises(PluginError, match="No codec registered for JPEG"):
        registry.get(ImageFormat.JPEG)


def test_later_registration_replaces_codec() -> None:
    """Let plugins override the codec for a format."""
    registry = create_default_registry()
    replacement = _Codec("custom_png")
    registry.register(replacement)
    assert registry.get(ImageFormat.PNG) is replacement
    assert registry.names() == ["custom_png", "pillow_jpeg"]


def test_default_registry_has_pillow_codecs() -> None:
    """Register the built-in PNG and JPEG codecs."""
    registry = create_default_registry()
    assert registry.formats() == [ImageFormat.PNG, ImageFormat.JPEG]
    assert isinstance(registry.get(ImageFormat.PNG), PngCodec)
    assert isinstance(registry.get(ImageFormat.JPEG), JpegCodec)


def test_import_module_by_path_and_register_variants(tmp_path: Path) -> None:
    """Load codec module from file path and register via CODEC."""
    codec_file = tmp_path / "codec_mod.py"
    codec_file.write_text(
        "from meltforge.formats import ImageFormat\n"
        "class C:\n"
        "    name = 'file_jpeg'\n"
        "    format = ImageFormat.JPEG\n"
        "    def decode(self, path):\n"
        "        return path\n"
        "    def encode(self, image, path, options):\n"
        "        return None\n"
        "CODEC = C()\n",
        encoding="utf-8",
    )
    registry = create_default_registry(extra_modules=[str(codec_file)])
    assert registry.get(ImageFormat.JPEG).name == "file_jpeg"


def test_register_from_module_variants() -> None:
    """Support register_codecs, CODECS, and CODEC contracts."""
    registry = CodecRegistry()
    called: list[CodecRegistry] = []
    _register_from_module(
        types.SimpleNamespace(register_codecs=called.append),  # type: ignore[arg-type]
        registry,
    )
    assert called == [registry]

    _register_from_module(
        types.SimpleNamespace(CODECS=[_Codec("a"), _Codec("b", ImageFormat.JPEG)]),  # type: ignore[arg-type]
        registry,
    )
    assert registry.names() == ["a", "b"]

    with pytest.raises(PluginError, match="must expose"):
        _register_from_module(types.SimpleNamespace(), registry)  # type: ignore[arg-type]


def test_register_from_module_wraps_registration_failures(tmp_path: Path) -> None:
    """Report errors raised while a module registers codecs as PluginError."""
    failing = tmp_path / "failing_codecs.py"
    failing.write_text(
        "def register_codecs(registry):\n    raise RuntimeError('boom')\n",
        encoding="utf-8",
    )
    with pytest.raises(PluginError, match="failed to register: boom") as excinfo:
        create_default_registry(extra_modules=[str(failing)])
    assert excinfo.value.exit_code == 4

    with pytest.raises(PluginError, match="failed to register"):
        _register_from_module(
            types.SimpleNamespace(__name__="numbers", CODECS=42),  # type: ignore[arg-type]
            CodecRegistry(),
        )


def test_import_module_errors_are_wrapped(tmp_path: Path) -> None:
    """Wrap import failures as PluginError."""
    with pytest.raises(PluginError, match="Unable to import codec module"):
        _import_module_or_path("meltforge_definitely_missing_module")

    broken = tmp_path / "broken.py"
    broken.write_text("raise RuntimeError('boom')\n", encoding="utf-8")
    with pytest.raises(PluginError, match="boom"):
        _import_module_or_path(str(broken))


def test_import_module_invalid_path_spec_raises(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Raise PluginError when file path exists but import spec is invalid."""
    codec_file = tmp_path / "codec_mod.py"
    codec_file.write_text("x = 1\n", encoding="utf-8")
    monkeypatch.setattr(
        "meltforge.plugins.registry.importlib.util.spec_from_file_location",
        lambda *_args, **_kwargs: None,
    )
    with pytest.raises(PluginError, match="Unable to load codec module"):
        _import_module_or_path(str(codec_file))
