"""thumbsync - keep a folder of cropped thumbnails in sync with its source images."""

from .cache import ThumbnailCache, cache_key, collect_orphans, compute_delta
from .config import Config, get_config
from .exceptions import (
    FilesystemRaceError,
    OrphanDeleteError,
    SubprocessFailedError,
    SubprocessUnavailableError,
    ThumbnailCacheError,
    UnsupportedHostEnvironmentError,
)
from .models import QueueProgress, SourceItem, SyncReport, TranscodeResult, WorkItem
from .services import ThumbnailTranscoder, TranscodeQueue
from .store import ContentStore, LocalFolderStore

__version__ = "1.0.0"

__all__ = [
    "Config",
    "ContentStore",
    "FilesystemRaceError",
    "LocalFolderStore",
    "OrphanDeleteError",
    "QueueProgress",
    "SourceItem",
    "SubprocessFailedError",
    "SubprocessUnavailableError",
    "SyncReport",
    "ThumbnailCache",
    "ThumbnailCacheError",
    "ThumbnailTranscoder",
    "TranscodeQueue",
    "TranscodeResult",
    "UnsupportedHostEnvironmentError",
    "WorkItem",
    "cache_key",
    "collect_orphans",
    "compute_delta",
    "get_config",
]
