"""Removal of cache entries whose source item is gone."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AbstractSet

from ..exceptions import OrphanDeleteError
from ..models.source import OrphanReport

logger = logging.getLogger(__name__)


def collect_orphans(cache_dir: Path, live_keys: AbstractSet[str]) -> OrphanReport:
    """Delete every cache file whose name is not a live key.

    Failures are collected per file and never stop the pass. Files that vanish
    before deletion are skipped silently.

    Args:
        cache_dir: Directory holding the cache entries
        live_keys: Keys of all current source items

    Returns:
        OrphanReport listing removed files and deletion failures
    """
    report = OrphanReport()

    try:
        entries = list(os.scandir(cache_dir))
    except FileNotFoundError:
        return report

    for entry in entries:
        if entry.name in live_keys:
            continue

        path = Path(entry.path)
        try:
            if not entry.is_file():
                continue
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"Orphan {entry.name} already gone")
            continue
        except OSError as e:
            logger.warning(str(OrphanDeleteError(path, e)))
            report.errors.append((path, e))
            continue

        report.removed.append(path)

    if report.removed:
        logger.info(f"Removed {len(report.removed)} orphaned cache file(s)")
    return report
