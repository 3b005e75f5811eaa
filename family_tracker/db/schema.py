"""Database schema definitions and migration helpers."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    sql: str


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        description="create_initial_tables",
        sql="""
CREATE TABLE IF NOT EXISTS family_members (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    icon TEXT NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS tracked_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    family_member_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    category TEXT,
    value REAL,
    notes TEXT,
    tracked_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (family_member_id) REFERENCES family_members(id) ON DELETE CASCADE
);
""",
    ),
    Migration(
        version=2,
        description="create_diet_entries_table",
        sql="""
CREATE TABLE IF NOT EXISTS diet_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    member_id INTEGER NOT NULL,
    timestamp DATETIME NOT NULL,
    meal_type TEXT NOT NULL,
    description TEXT NOT NULL,
    calories INTEGER,
    notes TEXT,
    FOREIGN KEY (member_id) REFERENCES family_members(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_diet_entries_member_id ON diet_entries(member_id);
CREATE INDEX IF NOT EXISTS idx_diet_entries_timestamp ON diet_entries(timestamp);
CREATE INDEX IF NOT EXISTS idx_diet_entries_member_timestamp ON diet_entries(member_id, timestamp);
""",
    ),
)

SCHEMA_VERSION = MIGRATIONS[-1].version


def connect(db_path: str | Path) -> sqlite3.Connection:
    """Open the database without touching the schema.

    Rows come back as sqlite3.Row and foreign keys are enforced.
    """
    conn = sqlite3.connect(str(Path(db_path).expanduser()))
    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def current_version(conn: sqlite3.Connection) -> int:
    """Return the applied schema version, 0 for a fresh database."""
    try:
        row = conn.execute("SELECT MAX(version) AS version FROM schema_version").fetchone()
    except sqlite3.OperationalError:
        return 0
    return row["version"] or 0


def ensure_schema(db_path: str | Path) -> sqlite3.Connection:
    """Open (or create) the database and apply any pending migrations.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        An open sqlite3.Connection with the schema applied.
    """
    db_path = Path(db_path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = connect(db_path)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(
        """CREATE TABLE IF NOT EXISTS schema_version (
               version INTEGER NOT NULL,
               description TEXT NOT NULL,
               applied_at TEXT NOT NULL DEFAULT (datetime('now'))
           )"""
    )
    conn.commit()

    version = current_version(conn)
    for migration in MIGRATIONS:
        if migration.version <= version:
            continue
        # executescript commits first, so wrap the DDL and the version row together
        try:
            conn.executescript(
                "BEGIN;\n"
                + migration.sql
                + "\nINSERT INTO schema_version (version, description) VALUES "
                + f"({migration.version}, '{migration.description}');\nCOMMIT;"
            )
        except sqlite3.Error:
            if conn.in_transaction:
                conn.rollback()
            conn.close()
            raise
        logger.info(
            "Applied migration %d (%s) to %s",
            migration.version,
            migration.description,
            db_path,
        )

    return conn
