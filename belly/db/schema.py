"""Database schema definitions and migration helpers."""

from __future__ import annotations

import sqlite3
from pathlib import Path

_SCHEMA_VERSION = 1

_DDL = """
CREATE TABLE IF NOT EXISTS food_items (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    category TEXT NOT NULL DEFAULT 'Other',
    quantity REAL NOT NULL DEFAULT 1.0 CHECK (quantity >= 0),
    unit TEXT NOT NULL DEFAULT 'pieces',
    expiration_date TEXT NOT NULL,
    date_added TEXT NOT NULL,
    zone_tag TEXT,
    usage_type TEXT,
    date_removed TEXT,
    storage TEXT NOT NULL DEFAULT 'Refrigerator'
);

CREATE INDEX IF NOT EXISTS idx_food_removed ON food_items(date_removed);
CREATE INDEX IF NOT EXISTS idx_food_expiration ON food_items(expiration_date);
CREATE INDEX IF NOT EXISTS idx_food_category ON food_items(category);
CREATE INDEX IF NOT EXISTS idx_food_storage ON food_items(storage);

CREATE TABLE IF NOT EXISTS grocery_items (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    category TEXT NOT NULL DEFAULT 'Other',
    is_purchased INTEGER NOT NULL DEFAULT 0,
    date_added TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_grocery_purchased ON grocery_items(is_purchased);

CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);
"""


def ensure_schema(db_path: str | Path) -> sqlite3.Connection:
    """Open (or create) the database and ensure the schema is up to date.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        An open sqlite3.Connection with the schema applied.
    """
    db_path = Path(db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")

    try:
        row = conn.execute("SELECT version FROM schema_version").fetchone()
        current_version = row["version"] if row else 0
    except sqlite3.OperationalError:
        current_version = 0

    if current_version < _SCHEMA_VERSION:
        conn.executescript(_DDL)
        conn.execute("DELETE FROM schema_version")
        conn.execute(
            "INSERT INTO schema_version (version) VALUES (?)",
            (_SCHEMA_VERSION,),
        )
        conn.commit()

    return conn
