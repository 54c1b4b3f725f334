"""
Image analysis module for the scanner package.

Processes one file: stat, validity-checked cache lookup, and on a miss a
single read from which the content hash, perceptual hash and metadata are
all derived.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..database import ImageCache, CacheStats
from ..models import ImageRecord
from .dependencies import _logger
from .hashing import calculate_content_hash, calculate_perceptual_hash
from .metadata import extract_metadata


def file_times(stat_result: os.stat_result) -> tuple[int, int]:
    """
    Return (created_at, modified_at) as whole Unix seconds.

    Creation time is st_birthtime where the platform reports it, otherwise
    st_ctime.
    """
    created = getattr(stat_result, 'st_birthtime', None)
    if created is None:
        created = stat_result.st_ctime
    return int(created), int(stat_result.st_mtime)


def read_file_bytes(filepath: str) -> bytes:
    """Read the whole file in one go."""
    with open(filepath, 'rb') as f:
        return f.read()


def analyze_file(
    filepath: str | Path,
    cache: ImageCache,
    stats: Optional[CacheStats] = None,
) -> Optional[ImageRecord]:
    """
    Produce the record for one image file.

    Args:
        filepath: Path to the image file
        cache: Cache consulted before, and updated after, any real work
        stats: Optional hit/miss counters

    Returns:
        ImageRecord, or None if the file cannot be stat'ed or read

    Notes:
        - A cache hit returns the stored record as-is, without reading the file
        - An undecodable image still yields a record, with no perceptual hash
        - A failed cache write is logged and the record is returned anyway
    """
    filepath = str(filepath)

    try:
        st = os.stat(filepath)
    except OSError as e:
        _logger.debug(f"Cannot stat {filepath}: {e}")
        return None

    size = st.st_size
    created_at, modified_at = file_times(st)

    cached = cache.get(filepath, modified_at, size)
    if cached is not None:
        if stats is not None:
            stats.record_hit()
        return cached

    if stats is not None:
        stats.record_miss()

    try:
        data = read_file_bytes(filepath)
    except OSError as e:
        _logger.debug(f"Cannot read {filepath}: {e}")
        return None

    record = ImageRecord(
        path=filepath,
        name=os.path.basename(filepath),
        size=size,
        created_at=created_at,
        modified_at=modified_at,
        perceptual_hash=calculate_perceptual_hash(data, filepath),
        content_hash=calculate_content_hash(data),
        metadata=extract_metadata(data, filepath),
    )

    if not cache.set(record):
        _logger.debug(f"Record for {filepath} not cached; it will be rehashed next scan")
    return record


__all__ = ['analyze_file', 'file_times', 'read_file_bytes']
