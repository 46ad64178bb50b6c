"""Error taxonomy for the thumbnail cache.

Per-item errors (transcoder launch/exit problems, vanished files) are carried
inside results and turned into notices by the transcode queue. Only
``UnsupportedHostEnvironmentError`` is raised to callers, at construction time.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class ThumbnailCacheError(Exception):
    """Base class for all thumbnail cache errors."""


class SubprocessUnavailableError(ThumbnailCacheError):
    """The transcoder executable could not be launched."""

    def __init__(self, executable: str, cause: Optional[BaseException] = None):
        self.executable = executable
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot launch transcoder '{executable}'{detail}")


class SubprocessFailedError(ThumbnailCacheError):
    """The transcoder ran but exited non-zero or timed out."""

    def __init__(self, returncode: Optional[int], stderr: str = "", timed_out: bool = False):
        self.returncode = returncode
        self.stderr = stderr
        self.timed_out = timed_out
        if timed_out:
            message = "Transcoder timed out"
        else:
            message = f"Transcoder failed with code {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)


class FilesystemRaceError(ThumbnailCacheError):
    """A file disappeared between being listed and being used."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"File vanished before use: {path}")


class OrphanDeleteError(ThumbnailCacheError):
    """An orphaned cache file could not be removed."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to remove orphaned cache file {path.name}: {cause}")


class UnsupportedHostEnvironmentError(ThumbnailCacheError):
    """The content store cannot provide local filesystem paths."""


__all__ = [
    "FilesystemRaceError",
    "OrphanDeleteError",
    "SubprocessFailedError",
    "SubprocessUnavailableError",
    "ThumbnailCacheError",
    "UnsupportedHostEnvironmentError",
]
