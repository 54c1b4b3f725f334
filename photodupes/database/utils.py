"""
Shared utilities for database operations.

Provides:
- CacheStats: Hit/miss counters for a scan
- Row <-> ImageRecord conversion helpers
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from dataclasses import dataclass, field
from typing import Optional

from ..models import ImageRecord, MetadataBlock


logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Statistics about cache usage during a scan."""
    cache_hits: int = 0
    cache_misses: int = 0
    total_files: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_hit(self):
        with self._lock:
            self.cache_hits += 1

    def record_miss(self):
        with self._lock:
            self.cache_misses += 1

    @property
    def hit_rate(self) -> float:
        """Return cache hit rate as percentage."""
        if self.total_files == 0:
            return 0.0
        return (self.cache_hits / self.total_files) * 100


def serialize_metadata(metadata: Optional[MetadataBlock]) -> Optional[str]:
    """Serialize a metadata block to JSON text for the metadata column."""
    if metadata is None:
        return None
    return json.dumps(metadata.to_dict())


def deserialize_metadata(text: Optional[str]) -> Optional[MetadataBlock]:
    """
    Parse the metadata column.

    Unparseable JSON yields None rather than failing the lookup.
    """
    if not text:
        return None
    try:
        return MetadataBlock.from_dict(json.loads(text))
    except (ValueError, TypeError, AttributeError) as e:
        logger.debug(f"Ignoring unreadable metadata column: {e}")
        return None


def row_to_record(row: sqlite3.Row) -> ImageRecord:
    """
    Convert database row to ImageRecord object.

    Args:
        row: sqlite3.Row from the images table

    Returns:
        ImageRecord object
    """
    return ImageRecord(
        path=row['path'],
        name=row['name'],
        size=row['size'],
        created_at=row['created_at'],
        modified_at=row['modified_at'],
        perceptual_hash=row['perceptual_hash'],
        content_hash=row['content_hash'],
        metadata=deserialize_metadata(row['metadata']),
    )


def record_to_params(record: ImageRecord) -> tuple:
    """Column values for an INSERT OR REPLACE of this record."""
    return (
        record.path,
        record.name,
        record.size,
        record.created_at,
        record.modified_at,
        record.perceptual_hash,
        record.content_hash,
        serialize_metadata(record.metadata),
    )


__all__ = [
    'CacheStats',
    'serialize_metadata',
    'deserialize_metadata',
    'row_to_record',
    'record_to_params',
]
