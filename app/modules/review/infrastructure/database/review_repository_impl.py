"""
SQLAlchemy implementation of the review repository.
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.review.domain.models.review import Review
from app.modules.review.domain.repositories.review_repository import ReviewRepository
from app.modules.review.infrastructure.database.models import ReviewModel
from app.shared.core.exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)


class ReviewRepositoryImpl(ReviewRepository):
    """SQLAlchemy implementation of the ReviewRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, review: Review) -> Review:
        try:
            self._session.add(ReviewModel(
                id=review.id,
                user_id=review.user_id,
                course_id=review.course_id,
                rating=review.rating,
                comment=review.comment,
                created_at=review.created_at,
                updated_at=review.updated_at,
            ))
            await self._session.flush()
            return review
        except IntegrityError as e:
            raise ConflictError(
                "User has already reviewed this course",
                resource_type="review",
                conflicting_field="course_id",
            ) from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating review: {str(e)}")
            raise RepositoryError(f"Failed to create review: {str(e)}", "review", "create") from e

    async def get_by_id(self, review_id: UUID) -> Optional[Review]:
        try:
            model = await self._session.get(ReviewModel, review_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to retrieve review: {str(e)}", "review", "get_by_id") from e

    async def get_by_user_and_course(self, user_id: UUID, course_id: UUID) -> Optional[Review]:
        try:
            stmt = select(ReviewModel).where(ReviewModel.user_id == user_id, ReviewModel.course_id == course_id)
            model = (await self._session.execute(stmt)).scalar_one_or_none()
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to retrieve review: {str(e)}", "review", "get_by_user_and_course") from e

    async def get_by_course_id(self, course_id: UUID, limit: int = 20, offset: int = 0) -> List[Review]:
        try:
            stmt = (
                select(ReviewModel)
                .where(ReviewModel.course_id == course_id)
                .order_by(ReviewModel.created_at.desc())
                .limit(limit)
                .offset(offset)
            )
            result = await self._session.execute(stmt)
            return [self._model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to list reviews: {str(e)}", "review", "get_by_course_id") from e

    async def get_rating_stats(self, course_id: UUID) -> Tuple[float, int]:
        try:
            stmt = select(func.avg(ReviewModel.rating), func.count(ReviewModel.id)).where(
                ReviewModel.course_id == course_id
            )
            average, count = (await self._session.execute(stmt)).one()
            return (round(float(average), 2) if average is not None else 0.0), count
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to compute rating stats: {str(e)}", "review", "get_rating_stats") from e

    async def update(self, review: Review) -> Review:
        try:
            model = await self._session.get(ReviewModel, review.id)
            if model is None:
                raise RepositoryError(f"Review {review.id} does not exist", "review", "update")
            model.rating = review.rating
            model.comment = review.comment
            model.updated_at = review.updated_at
            await self._session.flush()
            return review
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to update review: {str(e)}", "review", "update") from e

    async def delete(self, review_id: UUID) -> bool:
        try:
            result = await self._session.execute(delete(ReviewModel).where(ReviewModel.id == review_id))
            return bool(result.rowcount)
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to delete review: {str(e)}", "review", "delete") from e

    def _model_to_domain(self, model: ReviewModel) -> Review:
        return Review(
            id=model.id,
            user_id=model.user_id,
            course_id=model.course_id,
            rating=model.rating,
            comment=model.comment,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
