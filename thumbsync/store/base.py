"""Abstract content store consumed by the thumbnail cache."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..models.source import SourceItem


class ContentStore(ABC):
    """Narrow view of the host document store.

    The cache only needs to enumerate a folder's items, learn where the store
    lives on the local filesystem, and turn local paths into URLs the host can
    load. Nothing else about the host's document model is exposed.
    """

    @abstractmethod
    def list_items(self, folder: str | Path) -> List[SourceItem]:
        """Snapshot the direct children of ``folder``.

        Args:
            folder: Store-relative folder path

        Returns:
            Source items currently in the folder
        """

    @abstractmethod
    def base_path(self) -> Optional[Path]:
        """Absolute local directory backing the store, or None if not local."""

    @abstractmethod
    def resource_url(self, path: Path, version_ms: Optional[float] = None) -> str:
        """URL addressing a local file.

        Args:
            path: Absolute path of the file
            version_ms: Modification time used to make the URL change on rewrite
        """

    def source_url(self, item: SourceItem) -> str:
        """URL addressing the original source item."""
        return self.resource_url(item.full_path, item.mtime_ms)
