"""Global pytest fixtures and configuration.

This module provides shared fixtures for all tests including:
- FFmpeg binary detection for integration tests
- A fake ffmpeg executable that records invocations
- A throwaway store root and Config factory
"""
from __future__ import annotations

import shutil
import stat
import sys
from pathlib import Path

import pytest

from thumbsync.config import Config, reset_config
from tests.mocks.transcoder_mocks import FAKE_FFMPEG_SOURCE, FakeFfmpeg


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Ensure no ambient thumbsync settings leak into tests."""
    for key in (
        "FFMPEG_PATH",
        "THUMBSYNC_CACHE_DIR",
        "TRANSCODE_TIMEOUT",
        "IMAGE_EXTENSIONS",
        "LOG_FILE",
        "JSON_OUTPUT",
        "VERBOSE",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture(scope="session")
def ffmpeg_binary() -> Path:
    """Locate FFmpeg binary, skip tests if not found.

    Returns:
        Path to FFmpeg binary

    Raises:
        pytest.skip: If FFmpeg is not available
    """
    ffmpeg_path = shutil.which("ffmpeg")
    if not ffmpeg_path:
        pytest.skip("FFmpeg not available - install FFmpeg to run integration tests")
    return Path(ffmpeg_path)


@pytest.fixture
def fake_ffmpeg(tmp_path: Path) -> FakeFfmpeg:
    """Write an executable stand-in for ffmpeg driven by the current interpreter."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "ffmpeg"
    log_path = bin_dir / "calls.log"
    script.write_text(FAKE_FFMPEG_SOURCE.format(python=sys.executable, log=str(log_path)))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return FakeFfmpeg(script, log_path)


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Store root with an empty ``wallpapers`` folder."""
    root = tmp_path / "vault"
    (root / "wallpapers").mkdir(parents=True)
    return root


@pytest.fixture
def make_config(fake_ffmpeg: FakeFfmpeg):
    """Build a Config pointing at the fake ffmpeg."""

    def _make(**overrides) -> Config:
        values = {
            "ffmpeg_path": str(fake_ffmpeg.path),
            "transcode_timeout": 10.0,
            "cache_dir": Path(".thumbsync/cache"),
        }
        values.update(overrides)
        return Config(**values)

    return _make
