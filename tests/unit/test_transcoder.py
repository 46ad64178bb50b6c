"""Unit tests for transcoder.py - one ffmpeg process per thumbnail.

Runs against a fake ffmpeg script so every outcome of the subprocess
contract can be exercised without a real FFmpeg install.
"""
import asyncio

import pytest

from thumbsync.exceptions import (
    FilesystemRaceError,
    SubprocessFailedError,
    SubprocessUnavailableError,
)
from thumbsync.services.transcoder import ThumbnailTranscoder
from tests.mocks.transcoder_mocks import write_image


class TestTranscode:
    @pytest.mark.asyncio
    async def test_success_writes_destination(self, tmp_path, fake_ffmpeg):
        source = write_image(tmp_path, "lake.png", content=b"pixels")
        dest = tmp_path / "cache" / "lake.png.1.cache.jpg"

        result = await ThumbnailTranscoder().transcode(source, dest, str(fake_ffmpeg.path))

        assert result.success
        assert result.error is None
        assert dest.read_bytes() == b"pixels"
        assert fake_ffmpeg.calls() == [str(source)]

    @pytest.mark.asyncio
    async def test_overwrites_existing_destination(self, tmp_path, fake_ffmpeg):
        source = write_image(tmp_path, "lake.png", content=b"new")
        dest = tmp_path / "lake.png.1.cache.jpg"
        dest.write_bytes(b"old")

        result = await ThumbnailTranscoder().transcode(source, dest, str(fake_ffmpeg.path))

        assert result.success
        assert dest.read_bytes() == b"new"

    @pytest.mark.asyncio
    async def test_non_zero_exit_carries_stderr(self, tmp_path, fake_ffmpeg):
        source = write_image(tmp_path, "corrupt.png")
        dest = tmp_path / "out.jpg"

        result = await ThumbnailTranscoder().transcode(source, dest, str(fake_ffmpeg.path))

        assert not result.success
        assert isinstance(result.error, SubprocessFailedError)
        assert result.error.returncode == 1
        assert "Invalid data found" in result.error.stderr
        assert not dest.exists()

    @pytest.mark.asyncio
    async def test_missing_executable(self, tmp_path):
        source = write_image(tmp_path, "lake.png")
        missing = tmp_path / "no-such-ffmpeg"

        result = await ThumbnailTranscoder().transcode(source, tmp_path / "out.jpg", str(missing))

        assert not result.success
        assert isinstance(result.error, SubprocessUnavailableError)
        assert result.error.executable == str(missing)

    @pytest.mark.asyncio
    async def test_non_executable_file(self, tmp_path):
        source = write_image(tmp_path, "lake.png")
        not_executable = tmp_path / "ffmpeg.txt"
        not_executable.write_text("not a program")
        not_executable.chmod(0o644)

        result = await ThumbnailTranscoder().transcode(source, tmp_path / "out.jpg", str(not_executable))

        assert isinstance(result.error, SubprocessUnavailableError)

    @pytest.mark.asyncio
    async def test_source_vanished(self, tmp_path, fake_ffmpeg):
        result = await ThumbnailTranscoder().transcode(
            tmp_path / "gone.png", tmp_path / "out.jpg", str(fake_ffmpeg.path)
        )

        assert isinstance(result.error, FilesystemRaceError)
        assert fake_ffmpeg.calls() == []

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self, tmp_path, fake_ffmpeg):
        source = write_image(tmp_path, "hang.png")

        result = await ThumbnailTranscoder(timeout=0.5).transcode(
            source, tmp_path / "out.jpg", str(fake_ffmpeg.path)
        )

        assert not result.success
        assert isinstance(result.error, SubprocessFailedError)
        assert result.error.timed_out
        assert result.duration < 10


class TestCheckAvailable:
    def test_fake_binary_available(self, fake_ffmpeg):
        assert ThumbnailTranscoder.check_available(str(fake_ffmpeg.path))

    def test_missing_binary(self, tmp_path):
        assert not ThumbnailTranscoder.check_available(str(tmp_path / "missing"))


class ExitedBeforeKill:
    """Process handle whose process exits between the timeout and the kill."""

    returncode = None

    async def communicate(self):
        await asyncio.sleep(10)

    def kill(self):
        self.returncode = 0
        raise ProcessLookupError()

    async def wait(self):
        return self.returncode


class TestKillRace:
    @pytest.mark.asyncio
    async def test_timeout_with_already_exited_process(self, tmp_path, monkeypatch):
        source = write_image(tmp_path, "lake.png")

        async def fake_exec(*args, **kwargs):
            return ExitedBeforeKill()

        monkeypatch.setattr(asyncio, "create_subprocess_exec", fake_exec)

        result = await ThumbnailTranscoder(timeout=0.05).transcode(source, tmp_path / "out.jpg", "ffmpeg")

        assert not result.success
        assert isinstance(result.error, SubprocessFailedError)
        assert result.error.timed_out
