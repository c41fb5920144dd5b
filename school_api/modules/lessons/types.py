"""Lessons GraphQL types."""

from __future__ import annotations

import strawberry
from strawberry.types import Info

from school_api.graphql.context import SchoolContext
from school_api.modules.lessons.models import Lesson
from school_api.modules.students.types import StudentType
from school_api.shared.utils import unique_in_order


@strawberry.type(name="Lesson")
class LessonType:
    id: strawberry.ID
    name: str
    start_date: str
    end_date: str
    student_ids: strawberry.Private[list[str]]

    @strawberry.field
    async def students(self, info: Info[SchoolContext, None]) -> list[StudentType]:
        """Resolve stored student ids; ids without a matching student are dropped."""
        if not self.student_ids:
            return []
        loaded = await info.context.student_loader.load_many(unique_in_order(self.student_ids))
        return [StudentType.from_model(student) for student in loaded if student is not None]

    @classmethod
    def from_model(cls, lesson: Lesson) -> "LessonType":
        return cls(
            id=strawberry.ID(lesson.id),
            name=lesson.name,
            start_date=lesson.start_date,
            end_date=lesson.end_date,
            student_ids=list(lesson.students),
        )


@strawberry.input
class CreateLessonInput:
    name: str
    start_date: str
    end_date: str
    students: list[strawberry.ID] | None = strawberry.field(default_factory=list)


@strawberry.input
class AssignStudentsToLessonInput:
    lesson_id: strawberry.ID
    student_ids: list[strawberry.ID]
