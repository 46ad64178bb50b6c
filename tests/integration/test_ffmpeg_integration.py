"""Integration tests against a real FFmpeg binary.

Skipped automatically when ffmpeg is not installed.
"""
import subprocess

import pytest

from thumbsync.cache import ThumbnailCache, cache_key
from thumbsync.config import Config
from thumbsync.services.ffmpeg_core import THUMBNAIL_HEIGHT, THUMBNAIL_WIDTH
from thumbsync.services.transcoder import ThumbnailTranscoder
from thumbsync.store import LocalFolderStore
from tests.mocks.transcoder_mocks import ffprobe_dimensions


def make_png(ffmpeg_binary, path, size):
    subprocess.run(
        [
            str(ffmpeg_binary),
            "-hide_banner",
            "-loglevel",
            "error",
            "-f",
            "lavfi",
            "-i",
            f"color=c=red:s={size}",
            "-frames:v",
            "1",
            "-y",
            str(path),
        ],
        check=True,
        capture_output=True,
    )
    return path


@pytest.mark.integration
class TestRealFfmpeg:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("size", ["800x600", "300x900"])
    async def test_thumbnail_is_cropped_to_fixed_size(self, ffmpeg_binary, tmp_path, size):
        source = make_png(ffmpeg_binary, tmp_path / "source.png", size)
        dest = tmp_path / "cache" / "source.png.1.cache.jpg"

        result = await ThumbnailTranscoder(timeout=30).transcode(source, dest, str(ffmpeg_binary))

        assert result.success, result.error_message
        dims = ffprobe_dimensions(dest)
        if dims is None:
            pytest.skip("ffprobe not available")
        assert dims == (THUMBNAIL_WIDTH, THUMBNAIL_HEIGHT)

    @pytest.mark.asyncio
    async def test_undecodable_source_fails(self, ffmpeg_binary, tmp_path):
        source = tmp_path / "broken.png"
        source.write_bytes(b"definitely not a png")

        result = await ThumbnailTranscoder(timeout=30).transcode(
            source, tmp_path / "out.jpg", str(ffmpeg_binary)
        )

        assert not result.success
        assert result.error.returncode != 0

    @pytest.mark.asyncio
    async def test_full_sync_cycle(self, ffmpeg_binary, vault):
        folder = vault / "wallpapers"
        make_png(ffmpeg_binary, folder / "a.png", "640x480")
        make_png(ffmpeg_binary, folder / "b.png", "1920x1080")
        store = LocalFolderStore(vault)
        cache = ThumbnailCache(store, Config(ffmpeg_path=str(ffmpeg_binary), transcode_timeout=30))

        await cache.sync("wallpapers")
        await cache.wait_until_idle()

        for item in store.list_items("wallpapers"):
            entry = cache.cache_dir / cache_key(item)
            assert entry.exists()
            assert cache.resolve(item) != store.source_url(item)
