"""Students business logic layer."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import uuid4

from school_api.modules.students.models import Student
from school_api.modules.students.repository import StudentRepository
from school_api.modules.students.schemas import StudentCreate

logger = logging.getLogger(__name__)


class StudentService:
    """Students domain service."""

    def __init__(self, repository: StudentRepository) -> None:
        self.repository = repository

    async def get_student(self, student_id: str) -> Student | None:
        """Return student by id, or None when it does not exist."""
        return await self.repository.get_student(student_id)

    async def list_students(self) -> Sequence[Student]:
        """Return every stored student."""
        return await self.repository.list_students()

    async def create_student(self, payload: StudentCreate) -> Student:
        """Persist a new student under a freshly generated id."""
        student = await self.repository.create_student(
            student_id=str(uuid4()),
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
        logger.info("Student created: %s", student.id)
        return student

    async def get_many_students(self, student_ids: Sequence[str]) -> Sequence[Student]:
        """Return students whose id is in the given set; unknown ids are skipped."""
        if not student_ids:
            return []
        return await self.repository.get_students_by_ids(list(set(student_ids)))
