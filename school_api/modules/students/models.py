"""Students ORM models."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from school_api.core.database import Base, DocumentMixin


class Student(DocumentMixin, Base):
    """Student document."""

    __tablename__ = "students"

    first_name: Mapped[str] = mapped_column(String(225), nullable=False)
    last_name: Mapped[str] = mapped_column(String(225), nullable=False)
