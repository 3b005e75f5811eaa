"""Pydantic request models for the diet commands."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CommandRequest(BaseModel):
    # GUI callers send camelCase (memberId); Python callers use field names
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        strict=True,
    )


class CreateDietEntryRequest(_CommandRequest):
    member_id: int
    timestamp: str
    meal_type: str
    description: str
    calories: Optional[int] = None
    notes: Optional[str] = None


class DietEntryFilter(_CommandRequest):
    member_id: Optional[int] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class UpdateDietEntryRequest(_CommandRequest):
    id: int
    member_id: Optional[int] = None
    timestamp: Optional[str] = None
    meal_type: Optional[str] = None
    description: Optional[str] = None
    calories: Optional[int] = None
    notes: Optional[str] = None


class DeleteDietEntryRequest(_CommandRequest):
    id: int
