# 📄 File: app/modules/enrollment/infrastructure/database/enrollment_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Database work for enrollments: saving a new one, loading it, listing a student's
# enrollments and saving progress changes.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of EnrollmentRepository. A unique-constraint violation on
# (user_id, course_id) surfaces as ConflictError so concurrent duplicate enrollments
# fail the same way as the application-level check.
#
# 🔗 Dependencies:
# - SQLAlchemy async session, EnrollmentModel, Enrollment domain model
#
# 🔄 Connected Modules / Calls From:
# - SqlAlchemyUnitOfWork (uow.enrollments)

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.enrollment.domain.models.enrollment import Enrollment, EnrollmentStatus
from app.modules.enrollment.domain.repositories.enrollment_repository import EnrollmentRepository
from app.modules.enrollment.infrastructure.database.models import EnrollmentModel
from app.shared.core.exceptions import ConflictError, RepositoryError
from app.shared.domain.money import Money

logger = logging.getLogger(__name__)


class EnrollmentRepositoryImpl(EnrollmentRepository):
    """SQLAlchemy implementation of the EnrollmentRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, enrollment: Enrollment) -> Enrollment:
        try:
            self._session.add(self._domain_to_model(enrollment))
            await self._session.flush()
            logger.info(f"Created enrollment {enrollment.id} (user={enrollment.user_id}, course={enrollment.course_id})")
            return enrollment

        except IntegrityError as e:
            logger.warning(f"Duplicate enrollment for user {enrollment.user_id} in course {enrollment.course_id}")
            raise ConflictError(
                "User already enrolled in this course",
                resource_type="enrollment",
                conflicting_field="course_id",
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error creating enrollment: {str(e)}")
            raise RepositoryError(f"Failed to create enrollment: {str(e)}", "enrollment", "create") from e

    async def get_by_id(self, enrollment_id: UUID) -> Optional[Enrollment]:
        try:
            model = await self._session.get(EnrollmentModel, enrollment_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving enrollment {enrollment_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve enrollment: {str(e)}", "enrollment", "get_by_id") from e

    async def get_by_user_id(
        self,
        user_id: UUID,
        status: Optional[EnrollmentStatus] = None,
        course_id: Optional[UUID] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Enrollment]:
        try:
            stmt = select(EnrollmentModel).where(EnrollmentModel.user_id == user_id)
            if status:
                stmt = stmt.where(EnrollmentModel.status == status.value)
            if course_id:
                stmt = stmt.where(EnrollmentModel.course_id == course_id)
            stmt = stmt.order_by(EnrollmentModel.enrolled_at.desc()).limit(limit).offset(offset)

            result = await self._session.execute(stmt)
            return [self._model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error listing enrollments of user {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to list enrollments: {str(e)}", "enrollment", "get_by_user_id") from e

    async def get_by_user_and_course(self, user_id: UUID, course_id: UUID) -> Optional[Enrollment]:
        try:
            stmt = select(EnrollmentModel).where(
                EnrollmentModel.user_id == user_id,
                EnrollmentModel.course_id == course_id,
            )
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving enrollment of user {user_id} in course {course_id}: {str(e)}")
            raise RepositoryError(
                f"Failed to retrieve enrollment: {str(e)}", "enrollment", "get_by_user_and_course"
            ) from e

    async def update(self, enrollment: Enrollment) -> Enrollment:
        try:
            model = await self._session.get(EnrollmentModel, enrollment.id)
            if model is None:
                raise RepositoryError(f"Enrollment {enrollment.id} does not exist", "enrollment", "update")

            model.status = enrollment.status.value
            model.completed_at = enrollment.completed_at
            model.progress_percentage = enrollment.progress_percentage
            model.updated_at = enrollment.updated_at
            await self._session.flush()
            return enrollment
        except SQLAlchemyError as e:
            logger.error(f"Database error updating enrollment {enrollment.id}: {str(e)}")
            raise RepositoryError(f"Failed to update enrollment: {str(e)}", "enrollment", "update") from e

    async def delete(self, enrollment_id: UUID) -> bool:
        try:
            result = await self._session.execute(
                delete(EnrollmentModel).where(EnrollmentModel.id == enrollment_id)
            )
            return bool(result.rowcount)
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting enrollment {enrollment_id}: {str(e)}")
            raise RepositoryError(f"Failed to delete enrollment: {str(e)}", "enrollment", "delete") from e

    def _model_to_domain(self, model: EnrollmentModel) -> Enrollment:
        return Enrollment(
            id=model.id,
            user_id=model.user_id,
            course_id=model.course_id,
            amount_paid=Money(amount=model.amount_paid),
            status=EnrollmentStatus(model.status),
            enrolled_at=model.enrolled_at,
            completed_at=model.completed_at,
            progress_percentage=model.progress_percentage,
            updated_at=model.updated_at,
        )

    def _domain_to_model(self, enrollment: Enrollment) -> EnrollmentModel:
        return EnrollmentModel(
            id=enrollment.id,
            user_id=enrollment.user_id,
            course_id=enrollment.course_id,
            amount_paid=enrollment.amount_paid.amount,
            status=enrollment.status.value,
            enrolled_at=enrollment.enrolled_at,
            completed_at=enrollment.completed_at,
            progress_percentage=enrollment.progress_percentage,
            updated_at=enrollment.updated_at,
        )
