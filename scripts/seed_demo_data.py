"""Seed idempotent demo data for local/non-production environments."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from school_api.core.config import get_settings
from school_api.core.database import SessionLocal, close_engine
from school_api.modules.lessons.models import Lesson
from school_api.modules.lessons.repository import LessonRepository
from school_api.modules.lessons.schemas import LessonCreate, LessonStudentsAssign
from school_api.modules.lessons.service import LessonService
from school_api.modules.students.models import Student
from school_api.modules.students.repository import StudentRepository
from school_api.modules.students.schemas import StudentCreate
from school_api.modules.students.service import StudentService

DEMO_STUDENTS = (
    ("Ann", "Lee"),
    ("Bob", "Ray"),
    ("Cleo", "Park"),
)

DEMO_LESSON_NAME = "Demo: Introduction to Physics"
DEMO_LESSON_START = "2030-09-01T09:00:00Z"
DEMO_LESSON_END = "2030-09-01T10:30:00Z"


@dataclass(slots=True)
class SeedStats:
    students_created: int = 0
    lesson_created: bool = False
    students_assigned: int = 0
    lesson_id: str | None = None
    student_ids: list[str] = field(default_factory=list)


async def _ensure_student(session: AsyncSession, first_name: str, last_name: str) -> tuple[Student, bool]:
    existing = await session.scalar(
        select(Student).where(Student.first_name == first_name, Student.last_name == last_name),
    )
    if existing is not None:
        return existing, False

    service = StudentService(StudentRepository(session))
    student = await service.create_student(StudentCreate(first_name=first_name, last_name=last_name))
    return student, True


async def _ensure_lesson(session: AsyncSession) -> tuple[Lesson, bool]:
    existing = await session.scalar(select(Lesson).where(Lesson.name == DEMO_LESSON_NAME))
    if existing is not None:
        return existing, False

    service = LessonService(LessonRepository(session))
    lesson = await service.create_lesson(
        LessonCreate(name=DEMO_LESSON_NAME, start_date=DEMO_LESSON_START, end_date=DEMO_LESSON_END),
    )
    return lesson, True


async def _run_seed(*, allow_production: bool) -> SeedStats:
    settings = get_settings()
    app_env = settings.app_env.strip().lower()
    if app_env in {"production", "prod"} and not allow_production:
        raise RuntimeError(
            "Refusing to seed demo data in production. "
            "Re-run with --allow-production only if you are absolutely sure.",
        )

    stats = SeedStats()

    async with SessionLocal() as session:
        try:
            for first_name, last_name in DEMO_STUDENTS:
                student, created = await _ensure_student(session, first_name, last_name)
                stats.students_created += int(created)
                stats.student_ids.append(student.id)

            lesson, stats.lesson_created = await _ensure_lesson(session)
            stats.lesson_id = lesson.id

            missing = [student_id for student_id in stats.student_ids if student_id not in lesson.students]
            if missing:
                service = LessonService(LessonRepository(session))
                await service.assign_students_to_lesson(
                    LessonStudentsAssign(lesson_id=lesson.id, student_ids=missing),
                )
                stats.students_assigned = len(missing)

            await session.commit()
        except Exception:
            await session.rollback()
            raise

    return stats


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Seed idempotent demo data (students and one lesson with them assigned).",
    )
    parser.add_argument(
        "--allow-production",
        action="store_true",
        help="Allow seeding even when APP_ENV is production/prod.",
    )
    return parser


def _print_summary(stats: SeedStats) -> None:
    print("Demo seed completed.")
    print(f"- Students created: {stats.students_created}")
    print(f"- Lesson created: {stats.lesson_created}")
    print(f"- Students assigned to lesson: {stats.students_assigned}")
    print(f"- Lesson id: {stats.lesson_id}")
    for student_id in stats.student_ids:
        print(f"- Student id: {student_id}")


def main() -> int:
    parser = _build_parser()
    args = parser.parse_args()

    try:
        stats = asyncio.run(_run_seed(allow_production=args.allow_production))
    except Exception as exc:
        print(f"Demo seed failed: {exc}")
        return 1
    finally:
        asyncio.run(close_engine())

    _print_summary(stats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
