"""Unit tests for ffmpeg_core.py - thumbnail command construction.

Tests cover:
- Argument vector structure and ordering
- Cover-then-center-crop filter
- Overwrite flag presence to prevent hangs
- Paths with spaces and special characters
"""
from pathlib import Path

from thumbsync.services.ffmpeg_core import (
    THUMBNAIL_HEIGHT,
    THUMBNAIL_WIDTH,
    build_thumbnail_cmd,
    build_thumbnail_filter,
)


class TestBuildThumbnailFilter:
    def test_default_dimensions(self):
        assert (THUMBNAIL_WIDTH, THUMBNAIL_HEIGHT) == (480, 270)
        assert build_thumbnail_filter() == (
            "scale=480:270:force_original_aspect_ratio=increase,crop=480:270"
        )

    def test_custom_dimensions(self):
        assert build_thumbnail_filter(100, 50) == (
            "scale=100:50:force_original_aspect_ratio=increase,crop=100:50"
        )


class TestBuildThumbnailCmd:
    def test_cmd_structure(self):
        cmd = build_thumbnail_cmd("ffmpeg", Path("/in/lake.png"), Path("/cache/lake.png.1.cache.jpg"))

        assert cmd[0] == "ffmpeg"
        assert cmd[cmd.index("-i") + 1] == "/in/lake.png"
        assert cmd[cmd.index("-vf") + 1] == build_thumbnail_filter()
        assert cmd[-1] == "/cache/lake.png.1.cache.jpg"

    def test_overwrite_flag(self):
        cmd = build_thumbnail_cmd("ffmpeg", Path("/in/a.png"), Path("/out/a.jpg"))
        assert "-y" in cmd, "Missing -y flag - could cause hangs on existing thumbnails"

    def test_custom_executable(self):
        cmd = build_thumbnail_cmd("/opt/ffmpeg/bin/ffmpeg", Path("/in/a.png"), Path("/out/a.jpg"))
        assert cmd[0] == "/opt/ffmpeg/bin/ffmpeg"

    def test_path_with_special_chars(self):
        source = Path("/in/my wallpaper (1) [copy];.png")
        cmd = build_thumbnail_cmd("ffmpeg", source, Path("/out/a.jpg"))

        # Passed as a single argv element, no shell quoting involved
        assert str(source) in cmd
