"""Thumbnail cache: staleness checks, orphan collection and sync orchestration.

Components:
    - compute_delta: decides which source items need a new thumbnail
    - collect_orphans: removes cache files with no current source item
    - ThumbnailCache: runs sync passes and resolves display URLs
"""

from .orphans import collect_orphans
from .staleness import CACHE_EXTENSION, cache_key, compute_delta, is_fresh, is_image
from .thumbnail_cache import ThumbnailCache

__all__ = [
    "CACHE_EXTENSION",
    "ThumbnailCache",
    "cache_key",
    "collect_orphans",
    "compute_delta",
    "is_fresh",
    "is_image",
]
