from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace

import pytest

from school_api.graphql.context import SchoolContext, Services
from school_api.graphql.schema import schema
from school_api.modules.lessons.service import LessonService
from school_api.modules.students.service import StudentService


@dataclass
class FakeStudent:
    id: str
    first_name: str
    last_name: str


@dataclass
class FakeLesson:
    id: str
    name: str
    start_date: str
    end_date: str
    students: list[str] = field(default_factory=list)
    version: int = 1


class FakeStudentRepository:
    def __init__(self) -> None:
        self.students: dict[str, FakeStudent] = {}
        self.by_ids_calls = 0

    async def create_student(self, student_id: str, first_name: str, last_name: str) -> FakeStudent:
        student = FakeStudent(id=student_id, first_name=first_name, last_name=last_name)
        self.students[student.id] = student
        return student

    async def get_student(self, student_id: str) -> FakeStudent | None:
        return self.students.get(student_id)

    async def list_students(self) -> list[FakeStudent]:
        return list(self.students.values())

    async def get_students_by_ids(self, student_ids: list[str]) -> list[FakeStudent]:
        self.by_ids_calls += 1
        return [student for student in self.students.values() if student.id in student_ids]


class FakeLessonRepository:
    def __init__(self) -> None:
        self.lessons: dict[str, FakeLesson] = {}

    async def create_lesson(self, lesson_id: str, name: str, start_date: str, end_date: str, students: list[str]) -> FakeLesson:
        lesson = FakeLesson(id=lesson_id, name=name, start_date=start_date, end_date=end_date, students=students)
        self.lessons[lesson.id] = lesson
        return lesson

    async def get_lesson(self, lesson_id: str) -> FakeLesson | None:
        return self.lessons.get(lesson_id)

    async def list_lessons(self) -> list[FakeLesson]:
        return list(self.lessons.values())

    async def replace_students(self, lesson_id: str, expected_version: int, students: list[str]) -> FakeLesson | None:
        current = self.lessons[lesson_id]
        if current.version != expected_version:
            return None
        updated = replace(current, students=students, version=expected_version + 1)
        self.lessons[lesson_id] = updated
        return updated


class BrokenStudentRepository(FakeStudentRepository):
    async def list_students(self) -> list[FakeStudent]:
        raise RuntimeError("connection reset by peer")


@dataclass
class FakeStore:
    students: FakeStudentRepository = field(default_factory=FakeStudentRepository)
    lessons: FakeLessonRepository = field(default_factory=FakeLessonRepository)

    def context(self) -> SchoolContext:
        @asynccontextmanager
        async def open_services() -> AsyncIterator[Services]:
            yield Services(
                students=StudentService(self.students),  # type: ignore[arg-type]
                lessons=LessonService(self.lessons),  # type: ignore[arg-type]
            )

        return SchoolContext(services_factory=open_services)


CREATE_STUDENT = """
mutation CreateStudent($input: CreateStudentInput!) {
  createStudent(createStudentInput: $input) { id firstName lastName }
}
"""

CREATE_LESSON = """
mutation CreateLesson($input: CreateLessonInput!) {
  createLesson(createLessonInput: $input) { id name startDate endDate students { id } }
}
"""

ASSIGN_STUDENTS = """
mutation Assign($input: AssignStudentsToLessonInput!) {
  assignStudentsToLesson(assignStudentsToLessonInput: $input) { id students { id firstName } }
}
"""


async def _create_student(store: FakeStore, first_name: str, last_name: str) -> dict:
    result = await schema.execute(
        CREATE_STUDENT,
        variable_values={"input": {"firstName": first_name, "lastName": last_name}},
        context_value=store.context(),
    )
    assert result.errors is None
    return result.data["createStudent"]


def test_schema_exposes_expected_operations() -> None:
    sdl = schema.as_str()

    assert "lesson(id: String!): Lesson" in sdl
    assert "lessons: [Lesson!]!" in sdl
    assert "student(id: String!): Student" in sdl
    assert "students: [Student!]!" in sdl
    assert "createLesson(createLessonInput: CreateLessonInput!): Lesson!" in sdl
    assert "createStudent(createStudentInput: CreateStudentInput!): Student!" in sdl
    assert (
        "assignStudentsToLesson(assignStudentsToLessonInput: AssignStudentsToLessonInput!): Lesson!"
        in sdl
    )
    assert "students: [ID!] = []" in sdl


@pytest.mark.asyncio
async def test_create_student_then_fetch_by_id() -> None:
    store = FakeStore()
    created = await _create_student(store, "Ann", "Lee")

    result = await schema.execute(
        "query Get($id: String!) { student(id: $id) { id firstName lastName } }",
        variable_values={"id": created["id"]},
        context_value=store.context(),
    )

    assert created["id"]
    assert result.errors is None
    assert result.data["student"] == created == {"id": created["id"], "firstName": "Ann", "lastName": "Lee"}


@pytest.mark.asyncio
async def test_unknown_student_resolves_to_null() -> None:
    result = await schema.execute('{ student(id: "missing") { id } }', context_value=FakeStore().context())

    assert result.errors is None
    assert result.data == {"student": None}


@pytest.mark.asyncio
async def test_create_student_with_empty_name_returns_validation_error() -> None:
    store = FakeStore()
    result = await schema.execute(
        CREATE_STUDENT,
        variable_values={"input": {"firstName": "", "lastName": "x" * 226}},
        context_value=store.context(),
    )

    assert result.data is None
    assert result.errors is not None
    extensions = result.errors[0].extensions
    assert extensions["code"] == "validation_error"
    assert {item["field"] for item in extensions["fields"]} == {"firstName", "lastName"}
    assert store.students.students == {}


@pytest.mark.asyncio
async def test_create_lesson_without_students_has_empty_list() -> None:
    result = await schema.execute(
        CREATE_LESSON,
        variable_values={
            "input": {"name": "Physics", "startDate": "2024-01-01T09:00:00Z", "endDate": "2024-01-01T10:00:00Z"},
        },
        context_value=FakeStore().context(),
    )

    assert result.errors is None
    lesson = result.data["createLesson"]
    assert lesson["students"] == []
    assert lesson["startDate"] == "2024-01-01T09:00:00Z"


@pytest.mark.asyncio
async def test_lesson_students_drops_unknown_ids() -> None:
    store = FakeStore()
    student = await _create_student(store, "Ann", "Lee")

    created = await schema.execute(
        CREATE_LESSON,
        variable_values={
            "input": {
                "name": "Physics",
                "startDate": "2024-01-01",
                "endDate": "2024-01-02",
                "students": [student["id"], "ghost"],
            },
        },
        context_value=store.context(),
    )

    assert created.errors is None
    assert created.data["createLesson"]["students"] == [{"id": student["id"]}]
    stored = store.lessons.lessons[created.data["createLesson"]["id"]]
    assert stored.students == [student["id"], "ghost"]


@pytest.mark.asyncio
async def test_assign_students_appends_ids_and_resolves_students() -> None:
    store = FakeStore()
    ann = await _create_student(store, "Ann", "Lee")
    bob = await _create_student(store, "Bob", "Ray")
    created = await schema.execute(
        CREATE_LESSON,
        variable_values={
            "input": {"name": "Physics", "startDate": "2024-01-01", "endDate": "2024-01-02", "students": [ann["id"]]},
        },
        context_value=store.context(),
    )
    lesson_id = created.data["createLesson"]["id"]

    result = await schema.execute(
        ASSIGN_STUDENTS,
        variable_values={"input": {"lessonId": lesson_id, "studentIds": [bob["id"], ann["id"]]}},
        context_value=store.context(),
    )

    assert result.errors is None
    assert store.lessons.lessons[lesson_id].students == [ann["id"], bob["id"], ann["id"]]
    assert result.data["assignStudentsToLesson"]["students"] == [
        {"id": ann["id"], "firstName": "Ann"},
        {"id": bob["id"], "firstName": "Bob"},
    ]


@pytest.mark.asyncio
async def test_assign_students_to_unknown_lesson_returns_not_found() -> None:
    result = await schema.execute(
        ASSIGN_STUDENTS,
        variable_values={"input": {"lessonId": "missing", "studentIds": ["s1"]}},
        context_value=FakeStore().context(),
    )

    assert result.errors is not None
    assert result.errors[0].message == "Lesson not found"
    assert result.errors[0].extensions == {"code": "not_found"}


@pytest.mark.asyncio
async def test_lessons_listing_batches_student_lookups() -> None:
    store = FakeStore()
    ann = await _create_student(store, "Ann", "Lee")
    for name in ("Physics", "Math"):
        await schema.execute(
            CREATE_LESSON,
            variable_values={
                "input": {"name": name, "startDate": "2024-01-01", "endDate": "2024-01-02", "students": [ann["id"]]},
            },
            context_value=store.context(),
        )
    store.students.by_ids_calls = 0

    result = await schema.execute(
        "{ lessons { name students { firstName } } students { id } }",
        context_value=store.context(),
    )

    assert result.errors is None
    assert [lesson["students"] for lesson in result.data["lessons"]] == [
        [{"firstName": "Ann"}],
        [{"firstName": "Ann"}],
    ]
    assert len(result.data["students"]) == 1
    assert store.students.by_ids_calls == 1


@pytest.mark.asyncio
async def test_unexpected_errors_are_masked() -> None:
    store = FakeStore(students=BrokenStudentRepository())

    result = await schema.execute("{ students { id } }", context_value=store.context())

    assert result.errors is not None
    assert result.errors[0].message == "Internal server error"
    assert result.errors[0].extensions == {"code": "internal_error"}
