"""Students schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class StudentCreate(BaseModel):
    """Create student request."""

    first_name: str = Field(min_length=1, max_length=225)
    last_name: str = Field(min_length=1, max_length=225)
