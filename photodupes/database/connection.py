"""
Database connection management with thread safety.

Provides ConnectionManager, which owns the single SQLite connection shared by
every scan worker and serializes access to it.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from ..exceptions import CacheInitError


logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Owns one SQLite connection shared across threads.

    Provides context manager for database access with:
    - One lock around every statement (short critical sections)
    - WAL mode for better concurrent read throughput
    - synchronous=NORMAL, since the cache is disposable
    - Transaction management (BEGIN/COMMIT/ROLLBACK)
    """

    def __init__(self, db_path: str):
        """
        Open the database, creating its directory if needed.

        Args:
            db_path: Path to SQLite database file

        Raises:
            CacheInitError: If the directory or database cannot be created/opened
        """
        self.db_path = db_path
        self._lock = threading.Lock()
        self._ensure_directory()

        try:
            self._conn = sqlite3.connect(
                self.db_path,
                timeout=30.0,
                check_same_thread=False,
                # Explicit BEGIN/COMMIT in connection()
                isolation_level=None,
            )
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
        except sqlite3.Error as e:
            raise CacheInitError(f"Cannot open cache database {self.db_path}: {e}") from e

        logger.info(f"Cache database opened at {self.db_path}")

    def _ensure_directory(self):
        """Ensure the directory for the database file exists."""
        db_path = Path(self.db_path).resolve()
        db_dir = db_path.parent

        try:
            db_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheInitError(f"Cannot create cache directory {db_dir}: {e}") from e

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for serialized database access.

        Yields:
            The shared sqlite3.Connection inside a transaction

        Example:
            with conn_mgr.connection() as conn:
                conn.execute("INSERT INTO ...")
        """
        with self._lock:
            self._conn.execute("BEGIN")
            try:
                yield self._conn
                self._conn.execute("COMMIT")
            except Exception:
                self._conn.execute("ROLLBACK")
                raise

    @contextmanager
    def raw(self) -> Generator[sqlite3.Connection, None, None]:
        """Serialized access without a transaction (for VACUUM)."""
        with self._lock:
            yield self._conn

    def close(self):
        """Close the shared connection."""
        with self._lock:
            self._conn.close()


__all__ = ['ConnectionManager']
