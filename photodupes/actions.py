"""
File actions for photodupes.

Deletes files chosen by the caller and evicts their cache rows. Which files
to delete is decided elsewhere.
"""

from __future__ import annotations

import logging
import os

from .database import ImageCache
from .models import DeleteOutcome


logger = logging.getLogger(__name__)


def _cache_keys(path: str) -> set[str]:
    """
    Row keys that may refer to path.

    Scans store fully resolved paths, so a relative path or one that goes
    through a symlink is normalised before eviction.
    """
    return {os.path.abspath(path), os.path.realpath(path)}


def delete_images(paths: list[str], cache: ImageCache) -> list[DeleteOutcome]:
    """
    Delete files from disk and drop their cache rows.

    Each path is attempted exactly once. A failure is recorded in that
    path's outcome and the remaining paths are still processed.

    Args:
        paths: Files to remove, absolute or relative to the working directory
        cache: Cache whose rows for removed files are evicted

    Returns:
        One DeleteOutcome per input path, in input order, carrying the path
        exactly as the caller gave it
    """
    outcomes = []

    for path in paths:
        # Before removal, while a symlink can still be followed
        keys = _cache_keys(path)

        try:
            # A symlink is unlinked, never its target
            os.remove(os.path.abspath(path))
        except OSError as e:
            logger.warning(f"Failed to delete {path}: {e}")
            outcomes.append(DeleteOutcome(path=path, deleted=False, error=str(e) or type(e).__name__))
            continue

        for key in keys:
            cache.delete(key)
        logger.info(f"Deleted {path}")
        outcomes.append(DeleteOutcome(path=path, deleted=True))

    return outcomes


__all__ = ['delete_images']
