"""Pydantic schemas for runtime validation of conversion inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversionJobConfig(BaseModel):
    """Validated raw paths for a single conversion request."""

    model_config = ConfigDict(extra="forbid")

    input_path: Path
    output_path: Path | None = None

    @field_validator("input_path", "output_path", mode="before")
    @classmethod
    def _reject_blank_paths(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            raise ValueError("path cannot be empty.")
        return value


class EncodeOptionsConfig(BaseModel):
    """Validated encoder options."""

    model_config = ConfigDict(extra="forbid")

    jpeg_quality: int = Field(default=90, ge=1, le=95)
    optimize: bool = False
    background: tuple[int, int, int] = (255, 255, 255)

    @field_validator("background")
    @classmethod
    def _validate_background(cls, value: tuple[int, int, int]) -> tuple[int, int, int]:
        if any(channel < 0 or channel > 255 for channel in value):
            raise ValueError("background channels must be within 0..255.")
        return value
