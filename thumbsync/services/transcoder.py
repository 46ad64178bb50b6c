"""Async thumbnail transcoder using FFmpeg."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import subprocess
import time
from pathlib import Path

from ..exceptions import (
    FilesystemRaceError,
    SubprocessFailedError,
    SubprocessUnavailableError,
)
from ..models.source import TranscodeResult
from .ffmpeg_core import build_thumbnail_cmd

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
# Keep the tail of ffmpeg's banner-heavy stderr
MAX_STDERR_CHARS = 2000


class ThumbnailTranscoder:
    """Run one FFmpeg process per thumbnail and report the outcome."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout

    @staticmethod
    def check_available(ffmpeg_path: str = "ffmpeg") -> bool:
        """Check whether ``ffmpeg_path -version`` runs successfully."""
        try:
            subprocess.run([ffmpeg_path, "-version"], capture_output=True, check=True, timeout=10)
        except subprocess.CalledProcessError:
            logger.error("FFmpeg check failed")
            return False
        except (FileNotFoundError, PermissionError, OSError):
            logger.error(f"FFmpeg is not installed or not accessible at '{ffmpeg_path}'")
            return False
        except subprocess.TimeoutExpired:
            logger.error("FFmpeg version check timed out")
            return False
        return True

    async def transcode(
        self, source_path: Path, dest_path: Path, ffmpeg_path: str = "ffmpeg"
    ) -> TranscodeResult:
        """Generate the thumbnail for ``source_path`` at ``dest_path``.

        Never raises for per-item problems; they come back as a failed result.

        Args:
            source_path: Absolute path of the source image
            dest_path: Cache entry to create or overwrite
            ffmpeg_path: Transcoder executable for this invocation

        Returns:
            TranscodeResult describing success or the failure cause
        """
        source_path = Path(source_path)
        dest_path = Path(dest_path)
        start = time.monotonic()

        def _failed(error) -> TranscodeResult:
            return TranscodeResult(
                success=False,
                source_path=source_path,
                dest_path=dest_path,
                error=error,
                duration=time.monotonic() - start,
            )

        if not source_path.exists():
            return _failed(FilesystemRaceError(source_path))

        try:
            dest_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create cache directory {dest_path.parent}: {e}")
            return _failed(FilesystemRaceError(dest_path.parent))

        cmd = build_thumbnail_cmd(ffmpeg_path, source_path, dest_path)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, PermissionError, OSError) as e:
            return _failed(SubprocessUnavailableError(ffmpeg_path, e))

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            # The process may exit on its own between the timeout and the kill
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            return _failed(SubprocessFailedError(proc.returncode, timed_out=True))
        except asyncio.CancelledError:
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()
            raise

        if proc.returncode != 0:
            stderr_text = stderr.decode("utf-8", errors="replace").strip()[-MAX_STDERR_CHARS:]
            return _failed(SubprocessFailedError(proc.returncode, stderr_text))

        if not dest_path.exists():
            return _failed(FilesystemRaceError(dest_path))

        return TranscodeResult(
            success=True,
            source_path=source_path,
            dest_path=dest_path,
            duration=time.monotonic() - start,
        )
