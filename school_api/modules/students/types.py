"""Students GraphQL types."""

from __future__ import annotations

import strawberry

from school_api.modules.students.models import Student


@strawberry.type(name="Student")
class StudentType:
    id: strawberry.ID
    first_name: str
    last_name: str

    @classmethod
    def from_model(cls, student: Student) -> "StudentType":
        return cls(
            id=strawberry.ID(student.id),
            first_name=student.first_name,
            last_name=student.last_name,
        )


@strawberry.input
class CreateStudentInput:
    first_name: str
    last_name: str
