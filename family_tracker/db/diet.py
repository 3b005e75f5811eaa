"""Diet entry CRUD and filtered listing."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from ..errors import NotFoundError, StorageError
from ..models import DietEntry, MealType
from .schema import connect

logger = logging.getLogger(__name__)

_COLUMNS = "id, member_id, timestamp, meal_type, description, calories, notes"

# primary result code for SQL errors and missing database objects
_SQLITE_ERROR = 1


class _FilterQuery:
    """Accumulates WHERE clauses and their bound parameters side by side."""

    def __init__(self, base: str) -> None:
        self._base = base
        self._clauses: list[str] = []
        self._params: list[Any] = []

    def where(self, clause: str, value: Any) -> _FilterQuery:
        self._clauses.append(clause)
        self._params.append(value)
        return self

    def where_if(self, clause: str, value: Any) -> _FilterQuery:
        """Add *clause* only when *value* is not None."""
        if value is not None:
            self.where(clause, value)
        return self

    def build(self, order_by: str) -> tuple[str, tuple[Any, ...]]:
        sql = self._base
        if self._clauses:
            sql += " WHERE " + " AND ".join(self._clauses)
        sql += f" ORDER BY {order_by}"
        return sql, tuple(self._params)


class DietEntryStore:
    """Manages the diet_entries table.

    No connection is held between calls: every operation opens its own,
    validates, executes and closes it again. The schema must already exist
    (see ``ensure_schema``).
    """

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path).expanduser()

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        try:
            conn = connect(self._db_path)
        except sqlite3.Error as e:
            raise _storage_error("Failed to open database", e) from e
        try:
            yield conn
        finally:
            conn.close()

    def create(
        self,
        member_id: int,
        timestamp: str,
        meal_type: str | MealType,
        description: str,
        calories: int | None = None,
        notes: str | None = None,
    ) -> DietEntry:
        """Insert a new diet entry for an existing family member.

        Returns:
            The stored entry, including its newly assigned id.

        Raises:
            ValidationError: If *meal_type* is not a known label.
            NotFoundError: If *member_id* does not exist.
            StorageError: On any database failure.
        """
        meal = MealType.parse(str(meal_type))

        with self._connection() as conn:
            _require_member(conn, member_id)
            try:
                with conn:
                    cur = conn.execute(
                        """INSERT INTO diet_entries
                           (member_id, timestamp, meal_type, description, calories, notes)
                           VALUES (?, ?, ?, ?, ?, ?)""",
                        (member_id, timestamp, meal.value, description, calories, notes),
                    )
            except sqlite3.Error as e:
                raise _storage_error("Failed to insert diet entry", e) from e
            new_id = cur.lastrowid

        logger.info("Created diet entry %d for member %d", new_id, member_id)
        return DietEntry(
            id=new_id,
            member_id=member_id,
            timestamp=timestamp,
            meal_type=meal,
            description=description,
            calories=calories,
            notes=notes,
        )

    def list(
        self,
        member_id: int | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[DietEntry]:
        """Return entries matching all given filters, most recent first.

        Dates are compared as strings against ``timestamp``; both bounds are
        inclusive. Stored meal types that no longer parse come back as OTHER.
        """
        sql, params = (
            _FilterQuery(f"SELECT {_COLUMNS} FROM diet_entries")
            .where_if("member_id = ?", member_id)
            .where_if("timestamp >= ?", start_date)
            .where_if("timestamp <= ?", end_date)
            .build(order_by="timestamp DESC, id DESC")
        )

        with self._connection() as conn:
            try:
                cur = conn.execute(sql, params)
            except sqlite3.Error as e:
                phase = (
                    "Failed to prepare query"
                    if _is_compile_error(e)
                    else "Failed to execute query"
                )
                raise _storage_error(phase, e) from e
            try:
                return [DietEntry.from_row(row) for row in cur]
            except sqlite3.Error as e:
                raise _storage_error("Failed to collect results", e) from e

    def get(self, entry_id: int) -> DietEntry:
        """Return a single entry.

        Raises:
            NotFoundError: If no entry has *entry_id*.
        """
        with self._connection() as conn:
            return _fetch_entry(conn, entry_id)

    def update(
        self,
        entry_id: int,
        member_id: int | None = None,
        timestamp: str | None = None,
        meal_type: str | MealType | None = None,
        description: str | None = None,
        calories: int | None = None,
        notes: str | None = None,
    ) -> DietEntry:
        """Apply a partial update to an existing entry.

        Any argument left as None keeps the stored value. Consequently
        ``calories`` and ``notes`` cannot be cleared through this method.

        Returns:
            The merged entry as written.
        """
        with self._connection() as conn:
            existing = _fetch_entry(conn, entry_id)

            meal = existing.meal_type if meal_type is None else MealType.parse(str(meal_type))
            merged = DietEntry(
                id=entry_id,
                member_id=existing.member_id if member_id is None else member_id,
                timestamp=existing.timestamp if timestamp is None else timestamp,
                meal_type=meal,
                description=existing.description if description is None else description,
                calories=existing.calories if calories is None else calories,
                notes=existing.notes if notes is None else notes,
            )

            if member_id is not None:
                _require_member(conn, merged.member_id)

            try:
                with conn:
                    conn.execute(
                        """UPDATE diet_entries
                           SET member_id = ?, timestamp = ?, meal_type = ?,
                               description = ?, calories = ?, notes = ?
                           WHERE id = ?""",
                        (
                            merged.member_id,
                            merged.timestamp,
                            merged.meal_type.value,
                            merged.description,
                            merged.calories,
                            merged.notes,
                            entry_id,
                        ),
                    )
            except sqlite3.Error as e:
                raise _storage_error("Failed to update diet entry", e) from e

        logger.info("Updated diet entry %d", entry_id)
        return merged

    def delete(self, entry_id: int) -> None:
        """Delete an entry.

        Raises:
            NotFoundError: If no entry has *entry_id*.
        """
        with self._connection() as conn:
            try:
                row = conn.execute(
                    "SELECT EXISTS(SELECT 1 FROM diet_entries WHERE id = ?)",
                    (entry_id,),
                ).fetchone()
            except sqlite3.Error as e:
                raise _storage_error("Failed to check if entry exists", e) from e
            if not row[0]:
                raise NotFoundError(f"Diet entry with id {entry_id} not found")

            try:
                with conn:
                    conn.execute("DELETE FROM diet_entries WHERE id = ?", (entry_id,))
            except sqlite3.Error as e:
                raise _storage_error("Failed to delete diet entry", e) from e

        logger.info("Deleted diet entry %d", entry_id)


def _storage_error(phase: str, cause: sqlite3.Error) -> StorageError:
    logger.warning("%s: %s", phase, cause)
    return StorageError(phase, cause)


def _is_compile_error(exc: sqlite3.Error) -> bool:
    """True if SQLite rejected the statement itself (missing table, bad SQL).

    Statement compilation reports the generic SQLITE_ERROR code; stepping
    fails with BUSY, IOERR, CORRUPT and the like.
    """
    code = getattr(exc, "sqlite_errorcode", None)
    if code is None:
        # sqlite_errorcode is only set on Python 3.11+
        return isinstance(exc, sqlite3.OperationalError)
    return code & 0xFF == _SQLITE_ERROR


def _require_member(conn: sqlite3.Connection, member_id: int) -> None:
    try:
        row = conn.execute(
            "SELECT EXISTS(SELECT 1 FROM family_members WHERE id = ?)",
            (member_id,),
        ).fetchone()
    except sqlite3.Error as e:
        raise _storage_error("Failed to validate member_id", e) from e
    if not row[0]:
        raise NotFoundError(f"Member with id {member_id} does not exist")


def _fetch_entry(conn: sqlite3.Connection, entry_id: int) -> DietEntry:
    try:
        row = conn.execute(
            f"SELECT {_COLUMNS} FROM diet_entries WHERE id = ?",
            (entry_id,),
        ).fetchone()
    except sqlite3.Error as e:
        raise _storage_error("Failed to query diet entry", e) from e
    if row is None:
        raise NotFoundError(f"Diet entry with id {entry_id} not found")
    return DietEntry.from_row(row)
