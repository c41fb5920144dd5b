"""Lessons repository layer."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from school_api.modules.lessons.models import Lesson


class LessonRepository:
    """DB operations for lessons domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_lesson(
        self,
        lesson_id: str,
        name: str,
        start_date: str,
        end_date: str,
        students: list[str],
    ) -> Lesson:
        lesson = Lesson(
            id=lesson_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            students=students,
            version=1,
        )
        self.session.add(lesson)
        await self.session.flush()
        return lesson

    async def get_lesson(self, lesson_id: str) -> Lesson | None:
        stmt = (
            select(Lesson)
            .where(Lesson.id == lesson_id)
            .execution_options(populate_existing=True)
        )
        return await self.session.scalar(stmt)

    async def list_lessons(self) -> Sequence[Lesson]:
        stmt = select(Lesson).order_by(Lesson.created_at.asc())
        return (await self.session.scalars(stmt)).all()

    async def replace_students(
        self,
        lesson_id: str,
        expected_version: int,
        students: list[str],
    ) -> Lesson | None:
        """Write a new student list only if the lesson is still at `expected_version`.

        Returns the updated lesson, or None when another writer got there first.
        """
        stmt = (
            update(Lesson)
            .where(Lesson.id == lesson_id, Lesson.version == expected_version)
            .values(students=students, version=expected_version + 1)
            .returning(Lesson)
            .execution_options(populate_existing=True, synchronize_session=False)
        )
        return await self.session.scalar(stmt)
