"""
Database schema initialization and migrations.

Provides schema versioning and table creation for the cache database.
"""

from __future__ import annotations

import sqlite3


# Schema version - increment when changing table structure
SCHEMA_VERSION = 1


def initialize_schema(conn: sqlite3.Connection) -> None:
    """
    Initialize database schema with versioning support.

    Creates tables and indexes if they don't exist. Drops and recreates
    the images table if the schema version has changed; rows are only a
    cache, so dropping them just forces recomputation.

    Args:
        conn: Active database connection

    Tables created:
        - meta: Schema version tracking
        - images: Latest record per file path
    """
    conn.execute("""
        CREATE TABLE IF NOT EXISTS meta (
            key TEXT PRIMARY KEY,
            value TEXT
        )
    """)

    result = conn.execute(
        "SELECT value FROM meta WHERE key = 'schema_version'"
    ).fetchone()

    current_version = int(result['value']) if result else 0

    if current_version < SCHEMA_VERSION:
        conn.execute("DROP TABLE IF EXISTS images")

    conn.execute("""
        CREATE TABLE IF NOT EXISTS images (
            path            TEXT PRIMARY KEY,
            name            TEXT NOT NULL,
            size            INTEGER NOT NULL,
            created_at      INTEGER NOT NULL,
            modified_at     INTEGER NOT NULL,
            perceptual_hash TEXT,
            content_hash    TEXT,
            metadata        TEXT
        )
    """)

    conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_images_perceptual_hash
        ON images(perceptual_hash)
    """)
    conn.execute("""
        CREATE INDEX IF NOT EXISTS idx_images_content_hash
        ON images(content_hash)
    """)

    conn.execute("""
        INSERT OR REPLACE INTO meta (key, value)
        VALUES ('schema_version', ?)
    """, (str(SCHEMA_VERSION),))


__all__ = ['SCHEMA_VERSION', 'initialize_schema']
