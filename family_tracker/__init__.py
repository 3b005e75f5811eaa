"""Family tracker backend: diet entries per family member in SQLite."""

from .commands import CommandResult, DietCommands
from .config import DatabaseConfig, LoggingConfig, TrackerConfig, load_config
from .db import DietEntryStore, FamilyMemberDB, TrackedItemDB, ensure_schema
from .errors import NotFoundError, StorageError, TrackerError, ValidationError
from .models import DietEntry, FamilyMember, MealType, TrackedItem
from .schemas import (
    CreateDietEntryRequest,
    DeleteDietEntryRequest,
    DietEntryFilter,
    UpdateDietEntryRequest,
)

__all__ = [
    "DietCommands",
    "CommandResult",
    "CreateDietEntryRequest",
    "DietEntryFilter",
    "UpdateDietEntryRequest",
    "DeleteDietEntryRequest",
    "DietEntryStore",
    "FamilyMemberDB",
    "TrackedItemDB",
    "ensure_schema",
    "DietEntry",
    "FamilyMember",
    "TrackedItem",
    "MealType",
    "TrackerError",
    "ValidationError",
    "NotFoundError",
    "StorageError",
    "TrackerConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "load_config",
]
