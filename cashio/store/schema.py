"""Database schema initialization and connection setup."""

import os
import sqlite3
from pathlib import Path

RECORDS_TABLE = "records"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_default_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "cashio" / "cashio.db"


def connect(db_path: Path | str) -> sqlite3.Connection:
    """Open a database connection with row factory configured.

    Args:
        db_path: Path to the database file, or ":memory:".

    Returns:
        Database connection. The caller owns it and must close it.

    Raises:
        sqlite3.Error: If the database cannot be opened.
    """
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def schema_exists(conn: sqlite3.Connection) -> bool:
    """Check whether the records table is present.

    Raises:
        sqlite3.Error: If the query fails.
    """
    row = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
        (RECORDS_TABLE,),
    ).fetchone()
    return row is not None


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the records table and its indexes if absent.

    Safe to call repeatedly; existing rows are never touched.

    Raises:
        sqlite3.Error: If schema creation fails.
    """
    cursor = conn.cursor()

    try:
        # AUTOINCREMENT keeps deleted ids from being handed out again
        cursor.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {RECORDS_TABLE} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                cents INTEGER NOT NULL,
                date TEXT NOT NULL,
                category TEXT NOT NULL DEFAULT 'default',
                description TEXT NOT NULL DEFAULT ''
            )
        """
        )

        cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_records_date ON {RECORDS_TABLE}(date)")
        cursor.execute(f"CREATE INDEX IF NOT EXISTS idx_records_category_date ON {RECORDS_TABLE}(category, date)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
