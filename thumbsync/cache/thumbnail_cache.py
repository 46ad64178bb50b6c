"""Thumbnail cache kept in sync with a folder of source images.

Architecture:
    ThumbnailCache (sync / resolve)
    ├── compute_delta    (staleness engine, pure)
    ├── collect_orphans  (deletes entries without a source)
    ├── TranscodeQueue   (background FIFO drain)
    │   └── ThumbnailTranscoder (one ffmpeg run per item)
    └── ContentStore     (source listing and resource URLs)

Example:
    ```python
    store = LocalFolderStore("~/vault")
    cache = ThumbnailCache(store, notifier=ConsoleManager())

    report = await cache.sync("wallpapers")   # returns once work is queued
    url = cache.resolve(item)                 # thumbnail if fresh, else original
    await cache.wait_until_idle()
    ```
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from ..config import Config, get_config
from ..exceptions import UnsupportedHostEnvironmentError
from ..models.source import QueueProgress, SourceItem, SyncReport
from ..services.transcode_queue import TranscodeQueue
from ..services.transcoder import ThumbnailTranscoder
from ..store.base import ContentStore
from ..ui.console import Notifier
from .orphans import collect_orphans
from .staleness import cache_key, compute_delta, is_fresh

logger = logging.getLogger(__name__)


class ThumbnailCache:
    """Keeps ``cache_dir`` consistent with the image items of a store folder.

    Args:
        store: Content store providing source items and URLs
        config: Settings; defaults to the global configuration
        notifier: Progress and failure notice surface
        transcoder: Invoker override, mainly for tests
        progress_callback: Optional callback for progress updates (completed, total)

    Raises:
        UnsupportedHostEnvironmentError: If the store is not on the local filesystem
    """

    def __init__(
        self,
        store: ContentStore,
        config: Optional[Config] = None,
        notifier: Optional[Notifier] = None,
        transcoder: Optional[ThumbnailTranscoder] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ):
        self.store = store
        self.config = config or get_config()
        self.config.validate()

        base_path = store.base_path()
        if base_path is None:
            raise UnsupportedHostEnvironmentError(
                "A local filesystem store is required for thumbnail caching"
            )

        self.cache_dir = self.config.resolve_cache_dir(base_path)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        self.queue = TranscodeQueue(
            transcoder or ThumbnailTranscoder(timeout=self.config.transcode_timeout),
            ffmpeg_path_provider=lambda: self.config.ffmpeg_path,
            notifier=notifier,
            progress_callback=progress_callback,
        )
        logger.debug(f"Thumbnail cache at {self.cache_dir}")

    @property
    def progress(self) -> QueueProgress:
        return self.queue.progress

    def update_settings(self, ffmpeg_path: str) -> None:
        """Use a different transcoder executable from the next queued item on."""
        self.config.ffmpeg_path = ffmpeg_path
        self.config.validate()

    async def sync(self, folder: str | Path) -> SyncReport:
        """Bring the cache in line with ``folder`` without waiting for transcoding.

        Args:
            folder: Store-relative folder holding the source images

        Returns:
            SyncReport for this pass
        """
        items = self.store.list_items(folder)
        delta = compute_delta(items, self.cache_dir, self.config.image_extensions)
        orphans = collect_orphans(self.cache_dir, delta.live_keys)

        if delta.to_regenerate:
            self.queue.enqueue(delta.to_regenerate)

        return SyncReport(
            scanned=len(delta.live_keys),
            enqueued=len(delta.to_regenerate),
            removed=orphans.removed,
            errors=orphans.errors,
        )

    def resolve(self, item: SourceItem) -> str:
        """URL of the fresh thumbnail for ``item``, or of the original when there is none."""
        entry_path = self.cache_dir / cache_key(item)
        try:
            if is_fresh(item, entry_path):
                return self.store.resource_url(entry_path, entry_path.stat().st_mtime_ns / 1_000_000)
        except OSError as e:
            logger.debug(f"Cache lookup for {item.name} failed, using original: {e}")
        return self.store.source_url(item)

    async def wait_until_idle(self) -> None:
        await self.queue.wait_until_idle()

    async def close(self) -> None:
        """Stop background work; the cache directory is left as is."""
        await self.queue.shutdown()
