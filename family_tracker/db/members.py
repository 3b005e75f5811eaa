"""Family member CRUD operations."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from ..models import FamilyMember
from .schema import ensure_schema

logger = logging.getLogger(__name__)

DEFAULT_MEMBERS: tuple[tuple[str, str], ...] = (
    ("Mom", "👩"),
    ("Dad", "👨"),
    ("Child", "🧒"),
)


class FamilyMemberDB:
    """Manages the family_members table."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def add(self, name: str, icon: str) -> int:
        """Insert a family member.

        Returns:
            The inserted row ID.
        """
        conn = self._get_conn()
        cur = conn.execute(
            "INSERT INTO family_members (name, icon) VALUES (?, ?)",
            (name, icon),
        )
        conn.commit()
        return cur.lastrowid

    def get(self, member_id: int) -> FamilyMember | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM family_members WHERE id = ?", (member_id,)
        ).fetchone()
        return _to_member(row) if row else None

    def list(self) -> list[FamilyMember]:
        """Return all members ordered by name."""
        conn = self._get_conn()
        rows = conn.execute("SELECT * FROM family_members ORDER BY name").fetchall()
        return [_to_member(r) for r in rows]

    def exists(self, member_id: int) -> bool:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT EXISTS(SELECT 1 FROM family_members WHERE id = ?)", (member_id,)
        ).fetchone()
        return bool(row[0])

    def update(self, member_id: int, name: str, icon: str) -> None:
        conn = self._get_conn()
        conn.execute(
            "UPDATE family_members SET name = ?, icon = ? WHERE id = ?",
            (name, icon, member_id),
        )
        conn.commit()

    def delete(self, member_id: int) -> None:
        """Delete a member; their diet entries and tracked items cascade."""
        conn = self._get_conn()
        conn.execute("DELETE FROM family_members WHERE id = ?", (member_id,))
        conn.commit()

    def seed_defaults(self) -> int:
        """Insert the default household when no members exist yet.

        Returns:
            Number of members inserted (0 if the table was not empty).
        """
        conn = self._get_conn()
        row = conn.execute("SELECT COUNT(*) FROM family_members").fetchone()
        if row[0]:
            return 0
        conn.executemany(
            "INSERT INTO family_members (name, icon) VALUES (?, ?)",
            DEFAULT_MEMBERS,
        )
        conn.commit()
        logger.info("Seeded %d default family members", len(DEFAULT_MEMBERS))
        return len(DEFAULT_MEMBERS)


def _to_member(row: sqlite3.Row) -> FamilyMember:
    return FamilyMember(
        id=row["id"],
        name=row["name"],
        icon=row["icon"],
        created_at=row["created_at"],
    )
