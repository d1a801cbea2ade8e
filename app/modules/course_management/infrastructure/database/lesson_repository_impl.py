"""
SQLAlchemy implementation of the lesson repository.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.course_management.domain.models.lesson import Lesson
from app.modules.course_management.domain.repositories.lesson_repository import LessonRepository
from app.modules.course_management.infrastructure.database.models import LessonModel
from app.shared.core.exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)


def lesson_model_to_domain(model: LessonModel) -> Lesson:
    return Lesson(
        id=model.id,
        course_id=model.course_id,
        title=model.title,
        description=model.description,
        video_url=model.video_url,
        content=model.content,
        order_number=model.order_number,
        duration_minutes=model.duration_minutes,
        is_preview=model.is_preview,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


class LessonRepositoryImpl(LessonRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, lesson: Lesson) -> Lesson:
        try:
            self._session.add(LessonModel(
                id=lesson.id,
                course_id=lesson.course_id,
                title=lesson.title,
                description=lesson.description,
                video_url=lesson.video_url,
                content=lesson.content,
                order_number=lesson.order_number,
                duration_minutes=lesson.duration_minutes,
                is_preview=lesson.is_preview,
                created_at=lesson.created_at,
                updated_at=lesson.updated_at,
            ))
            await self._session.flush()
            return lesson
        except IntegrityError as e:
            raise ConflictError(
                "Lesson order number already used in this course",
                resource_type="lesson",
                conflicting_field="order_number",
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating lesson for course {lesson.course_id}: {str(e)}")
            raise RepositoryError(f"Failed to create lesson: {str(e)}", "lesson", "create") from e

    async def get_by_id(self, lesson_id: UUID) -> Optional[Lesson]:
        try:
            model = await self._session.get(LessonModel, lesson_id)
            return lesson_model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving lesson {lesson_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve lesson: {str(e)}", "lesson", "get_by_id") from e

    async def get_by_course_id(self, course_id: UUID) -> List[Lesson]:
        try:
            stmt = select(LessonModel).where(LessonModel.course_id == course_id).order_by(LessonModel.order_number)
            result = await self._session.execute(stmt)
            return [lesson_model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error listing lessons of course {course_id}: {str(e)}")
            raise RepositoryError(f"Failed to list lessons: {str(e)}", "lesson", "get_by_course_id") from e

    async def update(self, lesson: Lesson) -> Lesson:
        try:
            model = await self._session.get(LessonModel, lesson.id)
            if model is None:
                raise RepositoryError(f"Lesson {lesson.id} does not exist", "lesson", "update")
            model.title = lesson.title
            model.description = lesson.description
            model.video_url = lesson.video_url
            model.content = lesson.content
            model.order_number = lesson.order_number
            model.duration_minutes = lesson.duration_minutes
            model.is_preview = lesson.is_preview
            model.updated_at = lesson.updated_at
            await self._session.flush()
            return lesson
        except SQLAlchemyError as e:
            logger.error(f"Database error updating lesson {lesson.id}: {str(e)}")
            raise RepositoryError(f"Failed to update lesson: {str(e)}", "lesson", "update") from e

    async def count_by_course(self, course_id: UUID) -> int:
        try:
            stmt = select(func.count()).select_from(LessonModel).where(LessonModel.course_id == course_id)
            return (await self._session.execute(stmt)).scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Database error counting lessons of course {course_id}: {str(e)}")
            raise RepositoryError(f"Failed to count lessons: {str(e)}", "lesson", "count_by_course") from e
