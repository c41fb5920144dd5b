"""Lessons business logic layer."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from uuid import uuid4

from school_api.core.config import get_settings
from school_api.modules.lessons.models import Lesson
from school_api.modules.lessons.repository import LessonRepository
from school_api.modules.lessons.schemas import LessonCreate, LessonStudentsAssign
from school_api.shared.exceptions import ConflictException, NotFoundException

settings = get_settings()
logger = logging.getLogger(__name__)


class LessonService:
    """Lessons domain service."""

    def __init__(self, repository: LessonRepository) -> None:
        self.repository = repository

    async def get_lesson(self, lesson_id: str) -> Lesson | None:
        """Return lesson by id, or None when it does not exist."""
        return await self.repository.get_lesson(lesson_id)

    async def list_lessons(self) -> Sequence[Lesson]:
        """Return every stored lesson."""
        return await self.repository.list_lessons()

    async def create_lesson(self, payload: LessonCreate) -> Lesson:
        """Persist a new lesson under a freshly generated id."""
        lesson = await self.repository.create_lesson(
            lesson_id=str(uuid4()),
            name=payload.name,
            start_date=payload.start_date,
            end_date=payload.end_date,
            students=list(payload.students),
        )
        logger.info("Lesson created: %s", lesson.id)
        return lesson

    async def assign_students_to_lesson(self, payload: LessonStudentsAssign) -> Lesson:
        """Append student ids to the lesson's list, keeping duplicates.

        The write is a compare-and-swap on the lesson version; a lost race is
        retried from a fresh read so concurrent assignments are never dropped.
        """
        for attempt in range(1, settings.lesson_assign_max_attempts + 1):
            lesson = await self.repository.get_lesson(payload.lesson_id)
            if lesson is None:
                raise NotFoundException("Lesson not found")

            updated = await self.repository.replace_students(
                lesson_id=lesson.id,
                expected_version=lesson.version,
                students=[*lesson.students, *payload.student_ids],
            )
            if updated is not None:
                logger.info(
                    "Assigned %d student(s) to lesson %s",
                    len(payload.student_ids),
                    lesson.id,
                )
                return updated

            logger.warning(
                "Concurrent update on lesson %s (attempt %d/%d)",
                lesson.id,
                attempt,
                settings.lesson_assign_max_attempts,
            )

        raise ConflictException("Lesson was modified concurrently, retry the assignment")
