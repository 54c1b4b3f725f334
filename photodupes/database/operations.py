"""
Core CRUD operations for the image cache.

Provides CacheOperations class for validity-checked lookup, upsert,
set-based pruning and single-row deletion.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterable, Optional

from ..models import ImageRecord
from .connection import ConnectionManager
from .utils import row_to_record, record_to_params


logger = logging.getLogger(__name__)


class CacheOperations:
    """
    Handles CRUD operations for the image cache.

    Every method runs a short statement under the connection manager's lock.
    """

    def __init__(self, connection_manager: ConnectionManager):
        """
        Initialize cache operations.

        Args:
            connection_manager: ConnectionManager instance for database access
        """
        self.conn_mgr = connection_manager

    def get(self, filepath: str, mtime: int, size: int) -> Optional[ImageRecord]:
        """
        Get the cached record if it is still valid.

        A hit requires the stored modification time and size to equal the
        supplied values exactly. A mismatch is a miss, never an error.

        Args:
            filepath: Path to the image file
            mtime: Modification time observed on disk (Unix seconds)
            size: File size observed on disk

        Returns:
            ImageRecord if cached and valid, None otherwise
        """
        try:
            with self.conn_mgr.connection() as conn:
                row = conn.execute("""
                    SELECT * FROM images
                    WHERE path = ? AND modified_at = ? AND size = ?
                """, (filepath, mtime, size)).fetchone()
        except sqlite3.Error as e:
            logger.debug(f"Cache lookup failed for {filepath}: {e}")
            return None

        return row_to_record(row) if row else None

    def set(self, record: ImageRecord) -> bool:
        """
        Insert or replace the row for record.path.

        Args:
            record: ImageRecord to cache

        Returns:
            True if successfully cached
        """
        try:
            with self.conn_mgr.connection() as conn:
                conn.execute("""
                    INSERT OR REPLACE INTO images (
                        path, name, size, created_at, modified_at,
                        perceptual_hash, content_hash, metadata
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, record_to_params(record))
            return True
        except sqlite3.Error as e:
            logger.warning(f"Cache write failed for {record.path}: {e}")
            return False

    def prune(self, valid_paths: Iterable[str]) -> int:
        """
        Delete every row whose path is not in valid_paths.

        Args:
            valid_paths: Paths that should survive

        Returns:
            Number of rows removed

        Raises:
            sqlite3.Error: If the cleanup fails
        """
        paths = [(p,) for p in set(valid_paths)]

        with self.conn_mgr.connection() as conn:
            conn.execute(
                "CREATE TEMP TABLE IF NOT EXISTS valid_paths (path TEXT PRIMARY KEY)"
            )
            conn.execute("DELETE FROM valid_paths")
            conn.executemany("INSERT INTO valid_paths (path) VALUES (?)", paths)
            result = conn.execute(
                "DELETE FROM images WHERE path NOT IN (SELECT path FROM valid_paths)"
            )
            removed = result.rowcount
            conn.execute("DELETE FROM valid_paths")

        return removed

    def delete(self, filepath: str) -> bool:
        """
        Remove a specific file from the cache.

        Args:
            filepath: Path to the file to evict

        Returns:
            True if the statement ran (whether or not a row existed)
        """
        try:
            with self.conn_mgr.connection() as conn:
                conn.execute("DELETE FROM images WHERE path = ?", (filepath,))
            return True
        except sqlite3.Error as e:
            logger.warning(f"Failed to evict {filepath} from cache: {e}")
            return False


__all__ = ['CacheOperations']
