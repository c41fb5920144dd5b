"""Students repository layer."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_api.modules.students.models import Student


class StudentRepository:
    """DB operations for students domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_student(self, student_id: str, first_name: str, last_name: str) -> Student:
        student = Student(id=student_id, first_name=first_name, last_name=last_name)
        self.session.add(student)
        await self.session.flush()
        return student

    async def get_student(self, student_id: str) -> Student | None:
        stmt = select(Student).where(Student.id == student_id)
        return await self.session.scalar(stmt)

    async def list_students(self) -> Sequence[Student]:
        stmt = select(Student).order_by(Student.created_at.asc())
        return (await self.session.scalars(stmt)).all()

    async def get_students_by_ids(self, student_ids: Sequence[str]) -> Sequence[Student]:
        stmt = select(Student).where(Student.id.in_(student_ids))
        return (await self.session.scalars(stmt)).all()
