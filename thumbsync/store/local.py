"""Content store backed by a plain local directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from ..models.source import SourceItem
from ..utils.paths import ensure_subpath
from .base import ContentStore

logger = logging.getLogger(__name__)


def _creation_time_ms(st: os.stat_result) -> int:
    # st_birthtime is missing on most Linux builds; st_ctime is the closest stand-in there.
    # st_ctime also moves on content writes, so on those hosts an edit yields a new cache
    # key and the previous entry is collected as an orphan on the next sync.
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return int(birthtime * 1000)
    return st.st_ctime_ns // 1_000_000


class LocalFolderStore(ContentStore):
    """Expose the files under ``root`` as source items."""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def base_path(self) -> Optional[Path]:
        return self.root

    def list_items(self, folder: str | Path) -> List[SourceItem]:
        folder_path = ensure_subpath(self.root, folder)
        items: List[SourceItem] = []

        try:
            entries = list(os.scandir(folder_path))
        except FileNotFoundError:
            logger.warning(f"Source folder not found: {folder_path}")
            return items

        for entry in sorted(entries, key=lambda e: e.name):
            try:
                if not entry.is_file():
                    continue
                st = entry.stat()
            except FileNotFoundError:
                logger.debug(f"Skipping {entry.name}: removed while listing")
                continue

            full_path = Path(entry.path)
            items.append(
                SourceItem(
                    name=entry.name,
                    path=full_path.relative_to(self.root).as_posix(),
                    mtime_ms=st.st_mtime_ns // 1_000_000,
                    ctime_ms=_creation_time_ms(st),
                    full_path=full_path,
                )
            )

        return items

    def get_item(self, path: str | Path) -> SourceItem:
        """Build the source item for a single store-relative file path.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        full_path = ensure_subpath(self.root, path)
        st = full_path.stat()
        return SourceItem(
            name=full_path.name,
            path=full_path.relative_to(self.root).as_posix(),
            mtime_ms=st.st_mtime_ns // 1_000_000,
            ctime_ms=_creation_time_ms(st),
            full_path=full_path,
        )

    def resource_url(self, path: Path, version_ms: Optional[float] = None) -> str:
        url = Path(path).resolve().as_uri()
        if version_ms is not None:
            url = f"{url}?{int(version_ms)}"
        return url
