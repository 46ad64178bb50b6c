"""FFmpeg command construction for thumbnail generation."""
from __future__ import annotations

from pathlib import Path
from typing import List

THUMBNAIL_WIDTH = 480
THUMBNAIL_HEIGHT = 270


def build_thumbnail_filter(width: int = THUMBNAIL_WIDTH, height: int = THUMBNAIL_HEIGHT) -> str:
    """Build the video filter that covers ``width`` x ``height`` then center-crops to it.

    ``force_original_aspect_ratio=increase`` scales so both sides are at least
    the target size; ``crop`` without offsets is centered.
    """
    return f"scale={width}:{height}:force_original_aspect_ratio=increase,crop={width}:{height}"


def build_thumbnail_cmd(ffmpeg_path: str, input_path: Path, output_path: Path) -> List[str]:
    """Build the ffmpeg argument vector for one thumbnail.

    Args:
        ffmpeg_path: Transcoder executable
        input_path: Source image
        output_path: Destination thumbnail, overwritten if present

    Returns:
        List of command arguments:
        [ffmpeg_path, "-i", <input>, "-vf", <filter>, "-y", <output>]
    """
    return [
        ffmpeg_path,
        "-i",
        str(input_path),
        "-vf",
        build_thumbnail_filter(),
        "-y",
        str(output_path),
    ]
