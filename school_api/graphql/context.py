"""Per-request GraphQL context."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Sequence
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass

from strawberry.dataloader import DataLoader
from strawberry.fastapi import BaseContext

from school_api.core.database import SessionLocal
from school_api.modules.lessons.repository import LessonRepository
from school_api.modules.lessons.service import LessonService
from school_api.modules.students.models import Student
from school_api.modules.students.repository import StudentRepository
from school_api.modules.students.service import StudentService


@dataclass(slots=True)
class Services:
    students: StudentService
    lessons: LessonService


ServicesFactory = Callable[[], AbstractAsyncContextManager[Services]]


@asynccontextmanager
async def open_services() -> AsyncIterator[Services]:
    """Open a unit of work: one DB session shared by both domain services.

    Resolvers run concurrently and an AsyncSession does not support
    concurrent operations, so every resolver opens its own unit of work.
    """
    async with SessionLocal() as session:
        try:
            yield Services(
                students=StudentService(StudentRepository(session)),
                lessons=LessonService(LessonRepository(session)),
            )
            await session.commit()
        except Exception:
            await session.rollback()
            raise


class SchoolContext(BaseContext):
    """Context object available to resolvers as `info.context`."""

    def __init__(self, services_factory: ServicesFactory = open_services) -> None:
        super().__init__()
        self.services = services_factory
        self.student_loader: DataLoader[str, Student | None] = DataLoader(load_fn=self._load_students)

    async def _load_students(self, student_ids: Sequence[str]) -> list[Student | None]:
        async with self.services() as services:
            students = await services.students.get_many_students(student_ids)
        by_id = {student.id: student for student in students}
        return [by_id.get(student_id) for student_id in student_ids]


async def get_context() -> SchoolContext:
    """Strawberry context getter used by the FastAPI router."""
    return SchoolContext()
