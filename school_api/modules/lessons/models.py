"""Lessons ORM models."""

from __future__ import annotations

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from school_api.core.database import Base, DocumentMixin


class Lesson(DocumentMixin, Base):
    """Lesson document holding references to enrolled students."""

    __tablename__ = "lessons"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[str] = mapped_column(String(64), nullable=False)
    end_date: Mapped[str] = mapped_column(String(64), nullable=False)
    # Student ids, not foreign keys; unknown ids are dropped at read time.
    students: Mapped[list[str]] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        default=list,
        nullable=False,
    )
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
