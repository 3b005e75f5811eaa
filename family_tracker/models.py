"""Data models for family members, tracked items and diet entries."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum

from .errors import ValidationError


class MealType(str, Enum):
    """Closed set of meal categories, stored by label."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> MealType:
        """Strictly parse a label; matching is case-sensitive.

        Raises:
            ValidationError: If *value* is not one of the labels.
        """
        for member in cls:
            if member.value == value:
                return member
        raise ValidationError(f"Unknown meal type: {value}")

    @classmethod
    def parse_or_other(cls, value: str | None) -> MealType:
        """Parse a stored label, falling back to OTHER for unknown values."""
        try:
            return cls.parse(value)  # type: ignore[arg-type]
        except ValidationError:
            return cls.OTHER


@dataclass
class FamilyMember:
    """A person whose meals and measurements are tracked."""

    id: int
    name: str
    icon: str
    created_at: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TrackedItem:
    """A free-form measurement logged for a family member."""

    id: int
    family_member_id: int
    name: str
    category: str | None = None
    value: float | None = None
    notes: str | None = None
    tracked_at: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DietEntry:
    """One logged meal for a family member."""

    id: int
    member_id: int
    timestamp: str  # ISO-8601, supplied by the caller
    meal_type: MealType
    description: str
    calories: int | None = None
    notes: str | None = None

    @classmethod
    def from_row(cls, row) -> DietEntry:
        """Build an entry from a diet_entries row (lenient on meal_type)."""
        return cls(
            id=row["id"],
            member_id=row["member_id"],
            timestamp=row["timestamp"],
            meal_type=MealType.parse_or_other(row["meal_type"]),
            description=row["description"],
            calories=row["calories"],
            notes=row["notes"],
        )

    def to_dict(self) -> dict:
        d = asdict(self)
        d["meal_type"] = self.meal_type.value
        return d
