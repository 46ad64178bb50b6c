"""Single-consumer FIFO queue in front of the thumbnail transcoder.

One asyncio task drains the queue, one item at a time. Enqueueing while a
drain is in progress appends to the backlog and grows the total, so progress
reads as one merged batch. Counters reset when the queue empties.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import Callable, Deque, Iterable, Optional

from ..exceptions import ThumbnailCacheError
from ..models.source import QueueProgress, TranscodeResult, WorkItem
from ..ui.console import Notifier, NullNotifier
from .transcoder import ThumbnailTranscoder

logger = logging.getLogger(__name__)

PROGRESS_PREFIX = "Generating thumbnails"


class TranscodeQueue:
    """Serializes transcoder invocations and exposes progress.

    Args:
        transcoder: Invoker used for every work item
        ffmpeg_path_provider: Called once per item to snapshot the transcoder path
        notifier: Progress line and per-item failure notices
        progress_callback: Optional callback for progress updates (completed, total)
    """

    def __init__(
        self,
        transcoder: ThumbnailTranscoder,
        ffmpeg_path_provider: Callable[[], str],
        notifier: Optional[Notifier] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ):
        self._transcoder = transcoder
        self._ffmpeg_path_provider = ffmpeg_path_provider
        self._notifier = notifier or NullNotifier()
        self._progress_callback = progress_callback

        self._pending: Deque[WorkItem] = deque()
        self._task: Optional[asyncio.Task] = None
        self._total = 0
        self._completed = 0

    @property
    def progress(self) -> QueueProgress:
        return QueueProgress(completed=self._completed, total=self._total)

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def enqueue(self, items: Iterable[WorkItem]) -> None:
        """Append work items and start draining if idle.

        Must be called from within a running event loop.
        """
        batch = list(items)
        if not batch:
            return

        self._pending.extend(batch)
        self._total += len(batch)
        logger.info(f"Queued {len(batch)} thumbnail(s), backlog {self.progress}")

        if not self.is_running:
            self._task = asyncio.get_running_loop().create_task(self._drain())
        self._report_progress()

    async def wait_until_idle(self) -> None:
        """Wait until the backlog, including items added meanwhile, is drained."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def shutdown(self) -> None:
        """Drop pending work and stop the in-flight item."""
        self._pending.clear()
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait({task})
        self._task = None
        self._reset()

    async def _drain(self) -> None:
        try:
            while self._pending:
                item = self._pending.popleft()
                await self._process(item)
                self._completed += 1
                self._report_progress()
        finally:
            self._reset()
            logger.debug("Transcode queue drained")

    async def _process(self, item: WorkItem) -> None:
        ffmpeg_path = self._ffmpeg_path_provider()
        logger.info(f"Processing: {item.source.name}")

        try:
            result = await self._transcoder.transcode(
                item.source.full_path, item.dest_path, ffmpeg_path
            )
        except Exception as e:
            logger.exception(f"Unexpected error while transcoding {item.source.path}")
            result = TranscodeResult(
                success=False,
                source_path=item.source.full_path,
                dest_path=item.dest_path,
                error=ThumbnailCacheError(str(e)),
            )

        if result.success:
            logger.debug(f"Generated {item.dest_path.name} in {result.duration:.2f}s")
            return

        logger.error(f"Failed to generate thumbnail for {item.source.path}: {result.error_message}")
        try:
            self._notifier.notice(f"Failed to generate thumbnail for {item.source.name}")
        except Exception:
            logger.exception("Notifier failed to show notice")

    def _report_progress(self) -> None:
        # Observers must not stop the drain or drop accepted work
        progress = self.progress
        try:
            self._notifier.show_progress(f"{PROGRESS_PREFIX}: {progress}")
        except Exception:
            logger.exception("Notifier failed to show progress")
        if self._progress_callback:
            try:
                self._progress_callback(progress.completed, progress.total)
            except Exception:
                logger.exception("Progress callback failed")

    def _reset(self) -> None:
        self._pending.clear()
        self._total = 0
        self._completed = 0
        try:
            self._notifier.hide_progress()
        except Exception:
            logger.exception("Notifier failed to hide progress")
