"""Data models for the thumbnail cache."""

from .source import (
    OrphanReport,
    QueueProgress,
    SourceItem,
    SyncDelta,
    SyncReport,
    TranscodeResult,
    WorkItem,
)

__all__ = [
    "OrphanReport",
    "QueueProgress",
    "SourceItem",
    "SyncDelta",
    "SyncReport",
    "TranscodeResult",
    "WorkItem",
]
