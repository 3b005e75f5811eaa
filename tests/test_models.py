"""Tests for meal type parsing and entry conversion."""

import pytest

from family_tracker.errors import ValidationError
from family_tracker.models import DietEntry, MealType


@pytest.mark.parametrize("label", ["Breakfast", "Lunch", "Dinner", "Snack", "Other"])
def test_parse_known_labels(label):
    """Every label parses to the member with the same value."""
    assert MealType.parse(label).value == label


@pytest.mark.parametrize("label", ["Brunch", "lunch", "LUNCH", "", " Lunch"])
def test_parse_rejects_unknown_labels(label):
    """Parsing is strict and case-sensitive."""
    with pytest.raises(ValidationError, match=f"Unknown meal type: {label}"):
        MealType.parse(label)


def test_parse_or_other_falls_back():
    """Unknown stored labels read back as Other."""
    assert MealType.parse_or_other("Brunch") is MealType.OTHER
    assert MealType.parse_or_other(None) is MealType.OTHER
    assert MealType.parse_or_other("Dinner") is MealType.DINNER


def test_meal_type_str_is_label():
    assert str(MealType.SNACK) == "Snack"


def test_diet_entry_to_dict_uses_label():
    """to_dict emits the meal type as its text label."""
    entry = DietEntry(
        id=1,
        member_id=2,
        timestamp="2024-01-15T12:00:00Z",
        meal_type=MealType.LUNCH,
        description="Soup",
    )
    assert entry.to_dict() == {
        "id": 1,
        "member_id": 2,
        "timestamp": "2024-01-15T12:00:00Z",
        "meal_type": "Lunch",
        "description": "Soup",
        "calories": None,
        "notes": None,
    }
