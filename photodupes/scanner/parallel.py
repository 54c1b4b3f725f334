"""
Parallel processing module for the scanner package.

Fans per-file analysis across a thread pool, reports throttled progress and
prunes cache rows for files that are no longer present.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional

from ..config import PROGRESS_EVERY
from ..database import ImageCache, CacheStats
from ..models import ImageRecord
from .analysis import analyze_file
from .file_discovery import find_image_files


_logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def analyze_images_parallel(
    filepaths: list[str],
    cache: ImageCache,
    progress_callback: Optional[ProgressCallback] = None,
    max_workers: Optional[int] = None,
    stats: Optional[CacheStats] = None,
) -> list[ImageRecord]:
    """
    Analyze multiple images in parallel.

    Args:
        filepaths: List of image paths to analyze
        cache: Shared cache used by every worker
        progress_callback: Optional callback(current, total)
        max_workers: Pool size; defaults to the CPU count
        stats: Optional hit/miss counters

    Returns:
        Records for every file that could be processed, in no particular order

    Notes:
        progress_callback fires once with (0, total) before any work, then on
        every PROGRESS_EVERY-th completion and always on the last one.
    """
    total = len(filepaths)

    if progress_callback:
        progress_callback(0, total)

    if not filepaths:
        return []

    workers = max_workers or os.cpu_count() or 1
    results: list[ImageRecord] = []

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(analyze_file, path, cache, stats): path
            for path in filepaths
        }

        for completed, future in enumerate(as_completed(futures), start=1):
            try:
                record = future.result()
            except Exception as e:
                _logger.debug(f"Analysis failed for {futures[future]}: {e}")
                record = None

            if record is not None:
                results.append(record)

            if progress_callback and (completed % PROGRESS_EVERY == 0 or completed == total):
                progress_callback(completed, total)

    return results


def scan_directory(
    root_path: str | Path,
    recursive: bool,
    cache: ImageCache,
    progress_callback: Optional[ProgressCallback] = None,
    max_workers: Optional[int] = None,
    stats: Optional[CacheStats] = None,
) -> list[ImageRecord]:
    """
    Scan a directory: enumerate, analyze in parallel, then prune the cache.

    After the batch, every cache row whose path is not among the returned
    records is deleted. A pruning failure is logged and does not affect the
    returned records.

    Args:
        root_path: Directory to scan
        recursive: Descend into subdirectories
        cache: Shared cache
        progress_callback: Optional callback(current, total)
        max_workers: Pool size; defaults to the CPU count
        stats: Optional hit/miss counters

    Returns:
        List of ImageRecord (unordered)
    """
    start = time.time()
    _logger.info(f"Scanning {root_path} (recursive: {recursive})")

    filepaths = find_image_files(root_path, recursive=recursive)
    _logger.info(f"Found {len(filepaths):,} image files")

    if stats is not None:
        stats.total_files = len(filepaths)

    records = analyze_images_parallel(
        filepaths,
        cache,
        progress_callback=progress_callback,
        max_workers=max_workers,
        stats=stats,
    )

    try:
        removed = cache.prune({record.path for record in records})
        if removed:
            _logger.info(f"Pruned {removed:,} stale cache entries")
    except sqlite3.Error as e:
        _logger.warning(f"Cache prune failed: {e}")

    if stats is not None and stats.cache_hits:
        _logger.info(
            f"Cache: {stats.cache_hits:,} hits, {stats.cache_misses:,} misses "
            f"({stats.hit_rate:.1f}% hit rate)"
        )
    _logger.info(
        f"Scan complete: {len(records):,} images processed in {time.time() - start:.1f}s"
    )

    return records


__all__ = ['analyze_images_parallel', 'scan_directory']
