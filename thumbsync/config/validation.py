"""Configuration validation schemas."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic.types import PositiveFloat


class CacheSettings(BaseModel):
    """Validated settings consumed by the thumbnail cache core."""

    ffmpeg_path: str = Field(..., description="Transcoder executable, a path or a name on PATH")
    transcode_timeout: PositiveFloat = Field(60.0, description="Seconds before a transcoder run is killed")
    image_extensions: List[str] = Field(..., description="Allow-list of source image extensions")

    @field_validator("ffmpeg_path")
    @classmethod
    def validate_ffmpeg_path(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Transcoder path must not be empty")
        return v

    @field_validator("image_extensions")
    @classmethod
    def validate_image_extensions(cls, v: List[str]) -> List[str]:
        normalized = sorted({ext.strip().lstrip(".").lower() for ext in v if ext.strip()})
        if not normalized:
            raise ValueError("At least one image extension is required")
        return normalized
