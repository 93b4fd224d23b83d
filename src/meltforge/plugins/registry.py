"""Codec registry and plugin discovery helpers."""

from __future__ import annotations

import importlib
import importlib.util
import logging
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from meltforge.errors import PluginError
from meltforge.formats import ImageFormat
from meltforge.plugins.base import CodecPlugin
from meltforge.plugins.builtins import BUILTIN_CODECS

logger = logging.getLogger(__name__)


class CodecRegistry:
    """Registry of codecs keyed by image format.

    Registering a codec for a format that already has one replaces it, so
    plugin modules can override the built-in Pillow codecs.
    """

    def __init__(self) -> None:
        self._codecs: dict[ImageFormat, CodecPlugin] = {}

    def register(self, codec: CodecPlugin) -> None:
        """Register codec instance for its format.

        Parameters
        ----------
        codec : CodecPlugin
            Codec instance to register.

        Raises
        ------
        PluginError
            If codec does not provide a valid name or format.
        """
        name = (getattr(codec, "name", "") or "").strip()
        if not name:
            raise PluginError("Codec must define a non-empty 'name'.")
        image_format = getattr(codec, "format", None)
        if not isinstance(image_format, ImageFormat):
            raise PluginError(
                f"Codec '{name}' must declare 'format' as one of: "
                f"{', '.join(fmt.name for fmt in ImageFormat)}."
            )
        previous = self._codecs.get(image_format)
        if previous is not None:
            logger.debug("codec %s replaces %s for %s", name, previous.name, image_format)
        self._codecs[image_format] = codec

    def formats(self) -> list[ImageFormat]:
        """Return formats that have a registered codec."""
        return [fmt for fmt in ImageFormat if fmt in self._codecs]

    def names(self) -> list[str]:
        """Return registered codec names, sorted."""
        return sorted(codec.name for codec in self._codecs.values())

    def get(self, image_format: ImageFormat) -> CodecPlugin:
        """Get codec by format.

        Raises
        ------
        PluginError
            If no codec is registered for the format.
        """
        try:
            return self._codecs[image_format]
        except KeyError as exc:
            raise PluginError(
                f"No codec registered for {image_format}. "
                f"Available codecs: {', '.join(self.names()) or '<none>'}"
            ) from exc

    def load_module(self, module_or_path: str) -> None:
        """Load codec providers from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load
            codecs from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Parameters
    ----------
    module_or_path : str
        Python module path or local file path. Must be from a trusted source.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    PluginError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise PluginError(f"Unable to load codec module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise PluginError(f"Unable to load codec module from {candidate}: {exc}") from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise PluginError(
            f"Unable to import codec module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: CodecRegistry) -> None:
    """Register codec definitions found in module.

    Raises
    ------
    PluginError
        If the module exposes no codecs or registering them fails.
    """
    try:
        if hasattr(module, "register_codecs"):
            module.register_codecs(registry)
            return

        codecs_obj = getattr(module, "CODECS", None)
        if codecs_obj is not None:
            for codec in codecs_obj:
                registry.register(codec)
            return

        codec_obj = getattr(module, "CODEC", None)
        if codec_obj is not None:
            registry.register(codec_obj)
            return
    except PluginError:
        raise
    except Exception as exc:
        name = getattr(module, "__name__", repr(module))
        raise PluginError(f"Codec module {name} failed to register: {exc}") from exc

    raise PluginError(
        "Codec module must expose register_codecs(registry), CODECS, or CODEC."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> CodecRegistry:
    """Create registry with the built-in Pillow codecs.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional codec modules loaded after the built-ins.
    """
    registry = CodecRegistry()
    for codec_cls in BUILTIN_CODECS:
        registry.register(codec_cls())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
