"""
Housekeeping for the image cache: size report, wipe and compaction.
"""

from __future__ import annotations

import os
import logging
import sqlite3

from .connection import ConnectionManager


logger = logging.getLogger(__name__)


class MaintenanceOperations:
    """Whole-table operations that never touch individual records."""

    def __init__(self, connection_manager: ConnectionManager):
        self.conn_mgr = connection_manager

    def _count_rows(self) -> int:
        try:
            with self.conn_mgr.connection() as conn:
                return conn.execute("SELECT COUNT(*) AS cnt FROM images").fetchone()['cnt']
        except sqlite3.Error as e:
            logger.warning(f"Could not count cache rows: {e}")
            return 0

    def get_stats(self) -> dict:
        """
        Report how much the cache holds.

        Returns:
            Dictionary with:
                - total_entries: Rows in the images table
                - db_size_bytes: Size of the main database file
                - db_size_mb: The same, in MB rounded to 2 places
                - db_path: Location of the database file
        """
        db_path = self.conn_mgr.db_path
        size_bytes = os.path.getsize(db_path) if os.path.exists(db_path) else 0

        return {
            'total_entries': self._count_rows(),
            'db_size_bytes': size_bytes,
            'db_size_mb': round(size_bytes / (1024 * 1024), 2),
            'db_path': db_path,
        }

    def clear(self):
        """Drop every cached record, then shrink the file."""
        try:
            with self.conn_mgr.connection() as conn:
                removed = conn.execute("DELETE FROM images").rowcount
        except sqlite3.Error as e:
            logger.warning(f"Could not clear cache: {e}")
            return

        logger.info(f"Cleared {removed:,} cache entries")
        self.vacuum()

    def vacuum(self):
        """Reclaim free pages."""
        try:
            # No surrounding transaction allowed
            with self.conn_mgr.raw() as conn:
                conn.execute("VACUUM")
        except sqlite3.Error as e:
            logger.debug(f"VACUUM failed on {self.conn_mgr.db_path}: {e}")


__all__ = ['MaintenanceOperations']
