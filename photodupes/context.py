"""
Application context for photodupes.

The context is built once at startup and handed to the HTTP API and the CLI.
It owns the cache and exposes the boundary operations: scan, the two
clustering algorithms, delete and open.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .actions import delete_images
from .config import CACHE_DB_NAME, SIMILARITY_THRESHOLD
from .database import ImageCache, CacheStats
from .models import ImageRecord, DeleteOutcome
from .scanner import (
    scan_directory,
    find_exact_duplicates,
    find_similar_duplicates,
)
from .scanner.dependencies import Image
from .scanner.parallel import ProgressCallback
from .user_config import UserConfig
from .utils.platform import open_in_viewer


logger = logging.getLogger(__name__)


class AppContext:
    """
    Owns the cache and runs the boundary operations against it.

    Usage:
        context = create_context('/path/to/data')
        records = context.scan('/photos', recursive=True)
        groups = context.find_exact_duplicates(records)
    """

    def __init__(self, cache: ImageCache, max_workers: Optional[int] = None):
        self.cache = cache
        self.max_workers = max_workers

    def scan(
        self,
        root_path: str | Path,
        recursive: bool = True,
        progress_callback: Optional[ProgressCallback] = None,
        stats: Optional[CacheStats] = None,
    ) -> list[ImageRecord]:
        """Scan root_path, reporting (current, total) to progress_callback."""
        return scan_directory(
            root_path,
            recursive,
            self.cache,
            progress_callback=progress_callback,
            max_workers=self.max_workers,
            stats=stats,
        )

    def find_exact_duplicates(self, records: list[ImageRecord]) -> list[list[ImageRecord]]:
        return find_exact_duplicates(records)

    def find_similar_duplicates(
        self,
        records: list[ImageRecord],
        threshold: int = SIMILARITY_THRESHOLD,
    ) -> list[list[ImageRecord]]:
        return find_similar_duplicates(records, threshold=threshold)

    def delete(self, paths: list[str]) -> list[DeleteOutcome]:
        return delete_images(paths, self.cache)

    def open(self, path: str) -> bool:
        return open_in_viewer(path)

    def close(self):
        self.cache.close()


def create_context(
    data_dir: Optional[str] = None,
    user_config: Optional[UserConfig] = None,
) -> AppContext:
    """
    Build the application context.

    Args:
        data_dir: Writable directory for the cache database; defaults to the
            configured data directory
        user_config: Configuration source; a fresh UserConfig if omitted

    Returns:
        Ready AppContext

    Raises:
        CacheInitError: If the data directory or cache cannot be created.
            There is no degraded mode.
    """
    user_config = user_config or UserConfig()
    data_dir = data_dir or user_config.data_dir

    Image.MAX_IMAGE_PIXELS = user_config.max_image_pixels

    cache = ImageCache(os.path.join(data_dir, CACHE_DB_NAME))
    logger.debug(f"Application context ready (data dir: {data_dir})")

    return AppContext(cache, max_workers=user_config.workers)


__all__ = ['AppContext', 'create_context']
