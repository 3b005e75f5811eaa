"""Tests for the diet command surface."""

import pytest

from family_tracker.commands import CommandResult, DietCommands
from family_tracker.db.members import FamilyMemberDB
from family_tracker.schemas import DietEntryFilter, UpdateDietEntryRequest


@pytest.fixture
def commands(tmp_path):
    """Commands over a database containing member 1."""
    db_path = tmp_path / "tracker.db"
    members = FamilyMemberDB(db_path)
    members.add("Mom", "👩")
    members.close()
    return DietCommands(db_path)


LUNCH = {
    "member_id": 1,
    "timestamp": "2024-01-15T12:00:00Z",
    "meal_type": "Lunch",
    "description": "Test meal",
    "calories": 500,
    "notes": "Test notes",
}


def test_create_then_get(commands):
    """The documented lunch scenario round-trips through the commands."""
    created = commands.create_diet_entry(**LUNCH)
    assert created["id"] > 0
    assert {k: v for k, v in created.items() if k != "id"} == LUNCH

    entries = commands.get_diet_entries(member_id=1)
    assert entries == [created]


def test_invoke_accepts_camel_case(commands):
    result = commands.invoke(
        "create_diet_entry",
        {
            "memberId": 1,
            "timestamp": "2024-01-15T12:00:00Z",
            "mealType": "Lunch",
            "description": "Test meal",
        },
    )
    assert result.ok
    assert result.data["meal_type"] == "Lunch"
    assert result.data["calories"] is None


def test_invoke_get_with_null_filters(commands):
    commands.create_diet_entry(**LUNCH)
    result = commands.invoke(
        "get_diet_entries", {"memberId": None, "startDate": None, "endDate": None}
    )
    assert result.ok
    assert len(result.data) == 1


def test_invoke_returns_error_string(commands):
    """Tracker errors become plain messages."""
    result = commands.invoke("create_diet_entry", {**LUNCH, "meal_type": "Brunch"})
    assert not result.ok
    assert result.error == "Unknown meal type: Brunch"
    assert result.to_dict() == {"ok": False, "error": "Unknown meal type: Brunch"}


def test_invoke_missing_member(commands):
    result = commands.invoke("create_diet_entry", {**LUNCH, "member_id": 7})
    assert result.error == "Member with id 7 does not exist"


def test_invoke_update_and_delete(commands):
    created = commands.create_diet_entry(**LUNCH)

    result = commands.invoke("update_diet_entry", {"id": created["id"], "calories": 650})
    assert result.ok
    assert result.data["calories"] == 650
    assert result.data["notes"] == "Test notes"

    result = commands.invoke("delete_diet_entry", {"id": created["id"]})
    assert result == CommandResult(data=None)
    assert result.to_dict() == {"ok": True, "data": None}

    result = commands.invoke("delete_diet_entry", {"id": created["id"]})
    assert result.error == f"Diet entry with id {created['id']} not found"


def test_invoke_update_missing_entry(commands):
    result = commands.invoke("update_diet_entry", {"id": 404, "description": "x"})
    assert result.error == "Diet entry with id 404 not found"


def test_invoke_unknown_command(commands):
    result = commands.invoke("drop_everything", {})
    assert result.error == "Unknown command: drop_everything"


def test_invoke_missing_required_argument(commands):
    args = dict(LUNCH)
    del args["description"]
    result = commands.invoke("create_diet_entry", args)
    assert result.error == "Missing required argument for create_diet_entry: description"


def test_invoke_rejects_wrong_types(commands):
    """Strict validation: no str-to-int or bool-to-int coercion."""
    args = {k: v for k, v in LUNCH.items() if k != "member_id"}
    result = commands.invoke("create_diet_entry", {**args, "memberId": "1"})
    assert result.error == "Invalid type for memberId: Input should be a valid integer"

    result = commands.invoke("delete_diet_entry", {"id": True})
    assert result.error == "Invalid type for id: Input should be a valid integer"


def test_invoke_non_mapping_args_returns_error(commands):
    """A payload that is not a mapping is reported, not raised."""
    result = commands.invoke("get_diet_entries", [("memberId", 1)])
    assert not result.ok
    assert result.error.startswith("Invalid arguments for get_diet_entries: ")


def test_invoke_unknown_casing_is_rejected(commands):
    result = commands.invoke("get_diet_entries", {"memberID": 1})
    assert result.error == "Unexpected argument for get_diet_entries: memberID"


def test_invoke_none_args_uses_defaults(commands):
    commands.create_diet_entry(**LUNCH)
    result = commands.invoke("get_diet_entries")
    assert result.ok
    assert len(result.data) == 1


def test_invoke_missing_id(commands):
    result = commands.invoke("delete_diet_entry", {})
    assert result.error == "Missing required argument for delete_diet_entry: id"


def test_invoke_rejects_unexpected_argument(commands):
    result = commands.invoke("delete_diet_entry", {"id": 1, "force": True})
    assert result.error == "Unexpected argument for delete_diet_entry: force"


def test_command_names(commands):
    assert commands.command_names == [
        "create_diet_entry",
        "get_diet_entries",
        "update_diet_entry",
        "delete_diet_entry",
    ]


def test_request_models_accept_both_spellings():
    assert DietEntryFilter.model_validate({"memberId": 3}).member_id == 3
    assert DietEntryFilter.model_validate({"member_id": 3}).member_id == 3
    update = UpdateDietEntryRequest.model_validate({"id": 1, "mealType": "Snack"})
    assert update.model_dump() == {
        "id": 1,
        "member_id": None,
        "timestamp": None,
        "meal_type": "Snack",
        "description": None,
        "calories": None,
        "notes": None,
    }
