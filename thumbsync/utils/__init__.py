"""Utility modules for the thumbnail cache."""

from .logger import configure_logger
from .paths import ensure_subpath, mtime_ms

__all__ = [
    "configure_logger",
    "ensure_subpath",
    "mtime_ms",
]
