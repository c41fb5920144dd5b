"""Lessons GraphQL queries and mutations."""

from __future__ import annotations

from dataclasses import asdict

import strawberry
from strawberry.types import Info

from school_api.graphql.context import SchoolContext
from school_api.modules.lessons.schemas import LessonCreate, LessonStudentsAssign
from school_api.modules.lessons.types import AssignStudentsToLessonInput, CreateLessonInput, LessonType
from school_api.shared.validation import parse_input


@strawberry.type
class LessonQuery:
    @strawberry.field
    async def lesson(self, info: Info[SchoolContext, None], id: str) -> LessonType | None:
        """Fetch one lesson by id."""
        async with info.context.services() as services:
            lesson = await services.lessons.get_lesson(id)
        return LessonType.from_model(lesson) if lesson is not None else None

    @strawberry.field
    async def lessons(self, info: Info[SchoolContext, None]) -> list[LessonType]:
        """Fetch all lessons."""
        async with info.context.services() as services:
            lessons = await services.lessons.list_lessons()
        return [LessonType.from_model(lesson) for lesson in lessons]


@strawberry.type
class LessonMutation:
    @strawberry.mutation
    async def create_lesson(
        self,
        info: Info[SchoolContext, None],
        create_lesson_input: CreateLessonInput,
    ) -> LessonType:
        """Create lesson."""
        payload = parse_input(LessonCreate, asdict(create_lesson_input))
        async with info.context.services() as services:
            lesson = await services.lessons.create_lesson(payload)
        return LessonType.from_model(lesson)

    @strawberry.mutation
    async def assign_students_to_lesson(
        self,
        info: Info[SchoolContext, None],
        assign_students_to_lesson_input: AssignStudentsToLessonInput,
    ) -> LessonType:
        """Append student ids to an existing lesson."""
        payload = parse_input(LessonStudentsAssign, asdict(assign_students_to_lesson_input))
        async with info.context.services() as services:
            lesson = await services.lessons.assign_students_to_lesson(payload)
        return LessonType.from_model(lesson)
