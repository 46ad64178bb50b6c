"""Staleness engine: which source items need a fresh thumbnail.

An entry is fresh when its filesystem mtime is strictly newer than the source
item's recorded modification time. Keys derive from the source name and
creation time, so edits keep the key while renames produce a new one (the old
entry then becomes an orphan).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..models.source import SourceItem, SyncDelta, WorkItem
from ..utils.paths import mtime_ms

logger = logging.getLogger(__name__)

CACHE_EXTENSION = "jpg"


def cache_key(item: SourceItem) -> str:
    """Deterministic cache file name for a source item."""
    return f"{item.name}.{item.ctime_ms}.cache.{CACHE_EXTENSION}"


def is_image(item: SourceItem, extensions: Iterable[str]) -> bool:
    """Check the item's extension against the allow-list (case-insensitive)."""
    return item.extension in {ext.lstrip(".").lower() for ext in extensions}


def entry_mtime_ms(path: Path) -> Optional[float]:
    """Modification time of a cache entry in ms, or None if it does not exist."""
    return mtime_ms(path)


def is_fresh(item: SourceItem, entry_path: Path) -> bool:
    """True when ``entry_path`` exists and is strictly newer than the source."""
    entry_mtime = entry_mtime_ms(entry_path)
    return entry_mtime is not None and entry_mtime > item.mtime_ms


def compute_delta(
    items: Iterable[SourceItem], cache_dir: Path, image_extensions: Iterable[str]
) -> SyncDelta:
    """Compare a folder snapshot against the cache directory.

    Args:
        items: Point-in-time snapshot of the source folder
        cache_dir: Directory holding the cache entries
        image_extensions: Allow-list of source extensions

    Returns:
        SyncDelta with the work to do and every key that must be kept
    """
    extensions = {ext.lstrip(".").lower() for ext in image_extensions}
    delta = SyncDelta()

    for item in items:
        if item.extension not in extensions:
            continue

        key = cache_key(item)
        delta.live_keys.add(key)

        entry_path = Path(cache_dir) / key
        if not is_fresh(item, entry_path):
            delta.to_regenerate.append(WorkItem(source=item, dest_path=entry_path))

    logger.debug(
        f"Staleness check: {len(delta.live_keys)} images, {len(delta.to_regenerate)} need regeneration"
    )
    return delta
