"""SQLite storage for family members, tracked items and diet entries."""

from .diet import DietEntryStore
from .members import FamilyMemberDB
from .schema import SCHEMA_VERSION, connect, ensure_schema
from .tracked_items import TrackedItemDB

__all__ = [
    "DietEntryStore",
    "FamilyMemberDB",
    "TrackedItemDB",
    "SCHEMA_VERSION",
    "connect",
    "ensure_schema",
]
