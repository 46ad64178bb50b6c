"""Data models shared by the staleness engine, queue and resolver."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from ..exceptions import ThumbnailCacheError


@dataclass(frozen=True)
class SourceItem:
    """One original image as reported by a content store.

    Attributes:
        name: File name including extension (e.g. ``"lake.png"``)
        path: Store-relative logical path (e.g. ``"wallpapers/lake.png"``)
        mtime_ms: Content modification time, epoch milliseconds
        ctime_ms: Creation time, epoch milliseconds
        full_path: Absolute readable location on the local filesystem
    """

    name: str
    path: str
    mtime_ms: int
    ctime_ms: int
    full_path: Path

    @property
    def extension(self) -> str:
        """Lower-case extension without the leading dot."""
        return Path(self.name).suffix.lstrip(".").lower()


@dataclass(frozen=True)
class WorkItem:
    """A source item that needs its thumbnail (re)generated at ``dest_path``."""

    source: SourceItem
    dest_path: Path


@dataclass
class SyncDelta:
    """Output of the staleness engine for one snapshot."""

    to_regenerate: List[WorkItem] = field(default_factory=list)
    live_keys: Set[str] = field(default_factory=set)


@dataclass
class OrphanReport:
    """Files removed by the orphan collector and the ones it could not remove."""

    removed: List[Path] = field(default_factory=list)
    errors: List[Tuple[Path, OSError]] = field(default_factory=list)


@dataclass
class SyncReport:
    """Summary of one sync pass."""

    scanned: int = 0
    enqueued: int = 0
    removed: List[Path] = field(default_factory=list)
    errors: List[Tuple[Path, OSError]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scanned": self.scanned,
            "enqueued": self.enqueued,
            "removed": [str(p) for p in self.removed],
            "errors": [{"path": str(p), "error": str(e)} for p, e in self.errors],
        }


@dataclass(frozen=True)
class QueueProgress:
    """Snapshot of the transcode queue counters."""

    completed: int = 0
    total: int = 0

    def __str__(self) -> str:
        return f"{self.completed}/{self.total}"


@dataclass
class TranscodeResult:
    """Result of a single transcoder invocation."""

    success: bool
    source_path: Path
    dest_path: Path
    error: Optional[ThumbnailCacheError] = None
    duration: float = 0.0

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error else None
