"""
SQLite cache backend for photodupes.

Provides persistent caching of per-file scan results so that:
- Unchanged files are never re-read or re-hashed
- Rows for files missing from the latest scan are pruned

A cached row is valid only while the file's (size, modification time) pair
on disk matches the stored one.

Public API:
- ImageCache: Main cache class (one instance owned by the application context)
- CacheStats: Hit/miss statistics for a scan
"""

from __future__ import annotations

from .core import ImageCache
from .utils import CacheStats


__all__ = [
    'ImageCache',
    'CacheStats',
]
