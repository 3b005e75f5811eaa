"""Tracked item CRUD operations."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from ..models import TrackedItem
from .schema import ensure_schema


class TrackedItemDB:
    """Manages the tracked_items table."""

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

    def add(
        self,
        family_member_id: int,
        name: str,
        category: str | None = None,
        value: float | None = None,
        notes: str | None = None,
    ) -> int:
        """Insert a tracked item for a member.

        Returns:
            The inserted row ID.
        """
        conn = self._get_conn()
        cur = conn.execute(
            """INSERT INTO tracked_items
               (family_member_id, name, category, value, notes)
               VALUES (?, ?, ?, ?, ?)""",
            (family_member_id, name, category, value, notes),
        )
        conn.commit()
        return cur.lastrowid

    def get(self, item_id: int) -> TrackedItem | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM tracked_items WHERE id = ?", (item_id,)
        ).fetchone()
        return _to_item(row) if row else None

    def list(self, family_member_id: int | None = None) -> list[TrackedItem]:
        """Return tracked items, newest first, optionally for one member."""
        conn = self._get_conn()
        if family_member_id is not None:
            rows = conn.execute(
                """SELECT * FROM tracked_items
                   WHERE family_member_id = ?
                   ORDER BY tracked_at DESC, id DESC""",
                (family_member_id,),
            ).fetchall()
        else:
            rows = conn.execute(
                "SELECT * FROM tracked_items ORDER BY tracked_at DESC, id DESC"
            ).fetchall()
        return [_to_item(r) for r in rows]

    def update(
        self,
        item_id: int,
        name: str,
        category: str | None = None,
        value: float | None = None,
        notes: str | None = None,
    ) -> None:
        """Replace all editable fields of an item."""
        conn = self._get_conn()
        conn.execute(
            """UPDATE tracked_items
               SET name = ?, category = ?, value = ?, notes = ?
               WHERE id = ?""",
            (name, category, value, notes, item_id),
        )
        conn.commit()

    def delete(self, item_id: int) -> None:
        conn = self._get_conn()
        conn.execute("DELETE FROM tracked_items WHERE id = ?", (item_id,))
        conn.commit()


def _to_item(row: sqlite3.Row) -> TrackedItem:
    return TrackedItem(
        id=row["id"],
        family_member_id=row["family_member_id"],
        name=row["name"],
        category=row["category"],
        value=row["value"],
        notes=row["notes"],
        tracked_at=row["tracked_at"],
    )
