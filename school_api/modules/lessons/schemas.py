"""Lessons schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field, field_validator

from school_api.shared.utils import parse_iso_datetime

EntityId = Annotated[str, Field(min_length=1, max_length=64)]


class LessonCreate(BaseModel):
    """Create lesson request."""

    name: str = Field(min_length=1)
    start_date: str
    end_date: str
    students: list[EntityId] = Field(default_factory=list)

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_date_string(cls, value: str) -> str:
        """Reject strings that are not ISO 8601; keep the original text."""
        parse_iso_datetime(value)
        return value

    @field_validator("students", mode="before")
    @classmethod
    def default_students(cls, value: object) -> object:
        return [] if value is None else value


class LessonStudentsAssign(BaseModel):
    """Assign students to an existing lesson."""

    lesson_id: EntityId
    student_ids: list[EntityId]
