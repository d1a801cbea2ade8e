# 📄 File: app/modules/course_management/infrastructure/database/course_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Database work for courses: saving them, loading one, and searching the catalog with filters.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of CourseRepository with criteria-based filtered search
# (ILIKE text match, category/instructor/level/status filters, count + page).
#
# 🔗 Dependencies:
# - SQLAlchemy async session, CourseModel, LessonModel, Course/Lesson domain models
#
# 🔄 Connected Modules / Calls From:
# - SqlAlchemyUnitOfWork (uow.courses)

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.course_management.domain.models.course import Course, CourseLevel, CourseStatus
from app.modules.course_management.domain.models.lesson import Lesson
from app.modules.course_management.domain.repositories.course_repository import (
    CourseRepository,
    CourseSearchCriteria,
)
from app.modules.course_management.infrastructure.database.lesson_repository_impl import lesson_model_to_domain
from app.modules.course_management.infrastructure.database.models import CourseModel, LessonModel
from app.shared.core.exceptions import RepositoryError
from app.shared.domain.money import Money

logger = logging.getLogger(__name__)


class CourseRepositoryImpl(CourseRepository):
    """SQLAlchemy implementation of the CourseRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, course: Course) -> Course:
        try:
            self._session.add(self._domain_to_model(course))
            await self._session.flush()
            logger.info(f"Created course {course.id} for instructor {course.instructor_id}")
            return course
        except SQLAlchemyError as e:
            logger.error(f"Database error creating course: {str(e)}")
            raise RepositoryError(f"Failed to create course: {str(e)}", "course", "create") from e

    async def get_by_id(self, course_id: UUID) -> Optional[Course]:
        try:
            model = await self._session.get(CourseModel, course_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving course {course_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve course: {str(e)}", "course", "get_by_id") from e

    async def update(self, course: Course) -> Course:
        try:
            model = await self._session.get(CourseModel, course.id)
            if model is None:
                raise RepositoryError(f"Course {course.id} does not exist", "course", "update")

            model.category_id = course.category_id
            model.title = course.title
            model.description = course.description
            model.thumbnail_url = course.thumbnail_url
            model.status = course.status.value
            model.duration_hours = course.duration_hours
            model.updated_at = course.updated_at
            await self._session.flush()
            return course
        except SQLAlchemyError as e:
            logger.error(f"Database error updating course {course.id}: {str(e)}")
            raise RepositoryError(f"Failed to update course: {str(e)}", "course", "update") from e

    async def search(self, criteria: CourseSearchCriteria) -> Tuple[List[Course], int]:
        try:
            conditions = []
            if criteria.search:
                pattern = f"%{criteria.search.strip()}%"
                conditions.append(or_(CourseModel.title.ilike(pattern), CourseModel.description.ilike(pattern)))
            if criteria.category_id:
                conditions.append(CourseModel.category_id == criteria.category_id)
            if criteria.instructor_id:
                conditions.append(CourseModel.instructor_id == criteria.instructor_id)
            if criteria.level:
                conditions.append(CourseModel.level == criteria.level.value)
            if criteria.status:
                conditions.append(CourseModel.status == criteria.status.value)

            count_stmt = select(func.count()).select_from(CourseModel).where(*conditions)
            total = (await self._session.execute(count_stmt)).scalar_one()

            stmt = (
                select(CourseModel)
                .where(*conditions)
                .order_by(CourseModel.created_at.desc())
                .limit(criteria.limit)
                .offset(criteria.offset)
            )
            result = await self._session.execute(stmt)
            courses = [self._model_to_domain(model) for model in result.scalars().all()]
            return courses, total
        except SQLAlchemyError as e:
            logger.error(f"Database error searching courses: {str(e)}")
            raise RepositoryError(f"Failed to search courses: {str(e)}", "course", "search") from e

    async def get_by_instructor(self, instructor_id: UUID) -> List[Course]:
        courses, _ = await self.search(CourseSearchCriteria(instructor_id=instructor_id, limit=1000))
        return courses

    async def get_course_lessons(self, course_id: UUID) -> List[Lesson]:
        try:
            stmt = (
                select(LessonModel)
                .where(LessonModel.course_id == course_id)
                .order_by(LessonModel.order_number)
            )
            result = await self._session.execute(stmt)
            return [lesson_model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error loading lessons of course {course_id}: {str(e)}")
            raise RepositoryError(f"Failed to load course lessons: {str(e)}", "course", "get_course_lessons") from e

    def _model_to_domain(self, model: CourseModel) -> Course:
        return Course(
            id=model.id,
            instructor_id=model.instructor_id,
            category_id=model.category_id,
            title=model.title,
            description=model.description,
            price=Money(amount=model.price),
            thumbnail_url=model.thumbnail_url,
            status=CourseStatus(model.status),
            duration_hours=model.duration_hours,
            level=CourseLevel(model.level),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _domain_to_model(self, course: Course) -> CourseModel:
        return CourseModel(
            id=course.id,
            instructor_id=course.instructor_id,
            category_id=course.category_id,
            title=course.title,
            description=course.description,
            price=course.price.amount,
            thumbnail_url=course.thumbnail_url,
            status=course.status.value,
            duration_hours=course.duration_hours,
            level=course.level.value,
            created_at=course.created_at,
            updated_at=course.updated_at,
        )
