"""
ImageCache facade class for coordinating database operations.

Provides a unified interface to all cache operations using the facade pattern.
"""

from __future__ import annotations

import sqlite3
from typing import Iterable, Optional

from ..exceptions import CacheInitError
from ..models import ImageRecord
from .connection import ConnectionManager
from .schema import initialize_schema, SCHEMA_VERSION
from .operations import CacheOperations
from .maintenance import MaintenanceOperations


class ImageCache:
    """
    SQLite-backed cache of per-file scan results.

    Thread-safe: all scan workers share one instance.

    Usage:
        cache = ImageCache('/path/to/image_cache.db')

        record = cache.get(path, mtime, size)
        if record is None:
            record = build_record(path)
            cache.set(record)
    """

    SCHEMA_VERSION = SCHEMA_VERSION

    def __init__(self, db_path: str):
        """
        Open (or create) the cache database.

        Args:
            db_path: Path to SQLite database file

        Raises:
            CacheInitError: If the database cannot be created or opened
        """
        self.db_path = db_path

        self._conn_mgr = ConnectionManager(self.db_path)
        self._operations = CacheOperations(self._conn_mgr)
        self._maintenance = MaintenanceOperations(self._conn_mgr)

        try:
            with self._conn_mgr.connection() as conn:
                initialize_schema(conn)
        except sqlite3.Error as e:
            self._conn_mgr.close()
            raise CacheInitError(f"Cannot initialize cache schema in {db_path}: {e}") from e

    # Delegate to CacheOperations
    def get(self, filepath: str, mtime: int, size: int) -> Optional[ImageRecord]:
        """Get the cached record if its (mtime, size) still match."""
        return self._operations.get(filepath, mtime, size)

    def set(self, record: ImageRecord) -> bool:
        """Insert or replace the cached record for record.path."""
        return self._operations.set(record)

    def prune(self, valid_paths: Iterable[str]) -> int:
        """Remove rows whose path is absent from valid_paths."""
        return self._operations.prune(valid_paths)

    def delete(self, filepath: str) -> bool:
        """Remove a specific file from the cache."""
        return self._operations.delete(filepath)

    # Delegate to MaintenanceOperations
    def get_stats(self) -> dict:
        """Get cache statistics."""
        return self._maintenance.get_stats()

    def clear(self):
        """Clear all cached data."""
        self._maintenance.clear()

    def vacuum(self):
        """Compact the database file."""
        self._maintenance.vacuum()

    def close(self):
        """Close the underlying connection."""
        self._conn_mgr.close()


__all__ = ['ImageCache']
