"""Path utilities for containment checks and timestamp conversion."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional


def ensure_subpath(root: Path, sub: Path | str) -> Path:
    """Return absolute path for `root/sub` ensuring it stays within `root`.

    Raises ValueError if the resolved path escapes the root directory.
    """
    root_resolved = Path(root).resolve()
    candidate = (root_resolved / Path(sub)).resolve()
    try:
        # Will raise ValueError if candidate is not within root
        candidate.relative_to(root_resolved)
    except ValueError as e:
        raise ValueError(f"Path escapes root: {candidate} not in {root_resolved}") from e
    return candidate


def mtime_ms(path: Path) -> Optional[float]:
    """Filesystem modification time of ``path`` in epoch milliseconds.

    Returns None when the file does not exist.
    """
    try:
        return os.stat(path).st_mtime_ns / 1_000_000
    except FileNotFoundError:
        return None
