"""
SQLAlchemy implementation of the lesson progress repository.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.enrollment.domain.models.lesson_progress import LessonProgress, ProgressStatus
from app.modules.enrollment.domain.repositories.lesson_progress_repository import LessonProgressRepository
from app.modules.enrollment.infrastructure.database.models import LessonProgressModel
from app.shared.core.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class LessonProgressRepositoryImpl(LessonProgressRepository):
    """SQLAlchemy implementation of the LessonProgressRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, progress: LessonProgress) -> LessonProgress:
        created = await self.create_many([progress])
        return created[0]

    async def create_many(self, progresses: List[LessonProgress]) -> List[LessonProgress]:
        if not progresses:
            return []
        try:
            self._session.add_all([self._domain_to_model(progress) for progress in progresses])
            await self._session.flush()
            logger.debug(f"Created {len(progresses)} lesson progress rows")
            return progresses
        except SQLAlchemyError as e:
            logger.error(f"Database error creating lesson progress: {str(e)}")
            raise RepositoryError(f"Failed to create lesson progress: {str(e)}", "lesson_progress", "create") from e

    async def get_by_enrollment_id(self, enrollment_id: UUID) -> List[LessonProgress]:
        try:
            stmt = select(LessonProgressModel).where(LessonProgressModel.enrollment_id == enrollment_id)
            result = await self._session.execute(stmt)
            return [self._model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error loading progress of enrollment {enrollment_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to load lesson progress: {str(e)}", "lesson_progress", "get_by_enrollment_id"
            ) from e

    async def get_by_enrollment_and_lesson(self, enrollment_id: UUID, lesson_id: UUID) -> Optional[LessonProgress]:
        try:
            stmt = select(LessonProgressModel).where(
                LessonProgressModel.enrollment_id == enrollment_id,
                LessonProgressModel.lesson_id == lesson_id,
            )
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error loading progress for lesson {lesson_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to load lesson progress: {str(e)}", "lesson_progress", "get_by_enrollment_and_lesson"
            ) from e

    async def update(self, progress: LessonProgress) -> LessonProgress:
        try:
            model = await self._session.get(LessonProgressModel, progress.id)
            if model is None:
                raise RepositoryError(f"Lesson progress {progress.id} does not exist", "lesson_progress", "update")
            model.status = progress.status.value
            model.watch_duration_seconds = progress.watch_duration_seconds
            model.started_at = progress.started_at
            model.completed_at = progress.completed_at
            model.updated_at = progress.updated_at
            await self._session.flush()
            return progress
        except SQLAlchemyError as e:
            logger.error(f"Database error updating lesson progress {progress.id}: {str(e)}")
            raise RepositoryError(f"Failed to update lesson progress: {str(e)}", "lesson_progress", "update") from e

    def _model_to_domain(self, model: LessonProgressModel) -> LessonProgress:
        return LessonProgress(
            id=model.id,
            enrollment_id=model.enrollment_id,
            lesson_id=model.lesson_id,
            status=ProgressStatus(model.status),
            watch_duration_seconds=model.watch_duration_seconds,
            started_at=model.started_at,
            completed_at=model.completed_at,
            updated_at=model.updated_at,
        )

    def _domain_to_model(self, progress: LessonProgress) -> LessonProgressModel:
        return LessonProgressModel(
            id=progress.id,
            enrollment_id=progress.enrollment_id,
            lesson_id=progress.lesson_id,
            status=progress.status.value,
            watch_duration_seconds=progress.watch_duration_seconds,
            started_at=progress.started_at,
            completed_at=progress.completed_at,
            updated_at=progress.updated_at,
        )
