"""Request/response command surface over the diet entry store.

Each command takes named arguments and returns a JSON-ready payload. The
``invoke`` entry point is what a GUI bridge calls: it validates the argument
payload against a request model (snake_case or camelCase names) and turns
every failure into a message string.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import pydantic

from .db.diet import DietEntryStore
from .errors import TrackerError
from .schemas import (
    CreateDietEntryRequest,
    DeleteDietEntryRequest,
    DietEntryFilter,
    UpdateDietEntryRequest,
)

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one command: either ``data`` or an ``error`` message."""

    data: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.ok:
            return {"ok": True, "data": self.data}
        return {"ok": False, "error": self.error}


class DietCommands:
    """The four diet commands bound to one database file."""

    def __init__(self, db_path: str | Path) -> None:
        self._store = DietEntryStore(db_path)
        self._handlers: dict[str, tuple[Callable[..., Any], type[pydantic.BaseModel]]] = {
            "create_diet_entry": (self.create_diet_entry, CreateDietEntryRequest),
            "get_diet_entries": (self.get_diet_entries, DietEntryFilter),
            "update_diet_entry": (self.update_diet_entry, UpdateDietEntryRequest),
            "delete_diet_entry": (self.delete_diet_entry, DeleteDietEntryRequest),
        }

    @property
    def store(self) -> DietEntryStore:
        return self._store

    @property
    def command_names(self) -> list[str]:
        return list(self._handlers)

    def create_diet_entry(
        self,
        member_id: int,
        timestamp: str,
        meal_type: str,
        description: str,
        calories: int | None = None,
        notes: str | None = None,
    ) -> dict:
        entry = self._store.create(
            member_id=member_id,
            timestamp=timestamp,
            meal_type=meal_type,
            description=description,
            calories=calories,
            notes=notes,
        )
        return entry.to_dict()

    def get_diet_entries(
        self,
        member_id: int | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[dict]:
        entries = self._store.list(
            member_id=member_id, start_date=start_date, end_date=end_date
        )
        return [e.to_dict() for e in entries]

    def update_diet_entry(
        self,
        id: int,
        member_id: int | None = None,
        timestamp: str | None = None,
        meal_type: str | None = None,
        description: str | None = None,
        calories: int | None = None,
        notes: str | None = None,
    ) -> dict:
        entry = self._store.update(
            id,
            member_id=member_id,
            timestamp=timestamp,
            meal_type=meal_type,
            description=description,
            calories=calories,
            notes=notes,
        )
        return entry.to_dict()

    def delete_diet_entry(self, id: int) -> None:
        self._store.delete(id)

    def invoke(self, command: str, args: Any = None) -> CommandResult:
        """Run *command* with *args* and capture every failure as text."""
        handler = self._handlers.get(command)
        if handler is None:
            return CommandResult(error=f"Unknown command: {command}")
        func, request_model = handler

        try:
            request = request_model.model_validate({} if args is None else args)
        except pydantic.ValidationError as e:
            message = _format_validation_error(command, e)
            logger.debug("Command %s rejected: %s", command, message)
            return CommandResult(error=message)

        try:
            data = func(**request.model_dump())
        except TrackerError as e:
            logger.debug("Command %s failed: %s", command, e)
            return CommandResult(error=str(e))
        return CommandResult(data=data)


def _format_validation_error(command: str, exc: pydantic.ValidationError) -> str:
    """Turn the first pydantic error into a one-line message."""
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err["loc"])
    if not field:
        return f"Invalid arguments for {command}: {err['msg']}"
    if err["type"] == "missing":
        return f"Missing required argument for {command}: {field}"
    if err["type"] == "extra_forbidden":
        return f"Unexpected argument for {command}: {field}"
    return f"Invalid type for {field}: {err['msg']}"
