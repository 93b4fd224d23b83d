"""Codec plugin interfaces and registry."""

from .base import CodecPlugin
from .registry import CodecRegistry, create_default_registry

__all__ = ["CodecPlugin", "CodecRegistry", "create_default_registry"]
