"""Students GraphQL queries and mutations."""

from __future__ import annotations

from dataclasses import asdict

import strawberry
from strawberry.types import Info

from school_api.graphql.context import SchoolContext
from school_api.modules.students.schemas import StudentCreate
from school_api.modules.students.types import CreateStudentInput, StudentType
from school_api.shared.validation import parse_input


@strawberry.type
class StudentQuery:
    @strawberry.field
    async def student(self, info: Info[SchoolContext, None], id: str) -> StudentType | None:
        """Fetch one student by id."""
        async with info.context.services() as services:
            student = await services.students.get_student(id)
        return StudentType.from_model(student) if student is not None else None

    @strawberry.field
    async def students(self, info: Info[SchoolContext, None]) -> list[StudentType]:
        """Fetch all students."""
        async with info.context.services() as services:
            students = await services.students.list_students()
        return [StudentType.from_model(student) for student in students]


@strawberry.type
class StudentMutation:
    @strawberry.mutation
    async def create_student(
        self,
        info: Info[SchoolContext, None],
        create_student_input: CreateStudentInput,
    ) -> StudentType:
        """Create student."""
        payload = parse_input(StudentCreate, asdict(create_student_input))
        async with info.context.services() as services:
            student = await services.students.create_student(payload)
        return StudentType.from_model(student)
