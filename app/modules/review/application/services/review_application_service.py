# 📄 File: app/modules/review/application/services/review_application_service.py
# 🧭 Purpose (Layman Explanation):
# Lets students who actually took a course rate it, edit or remove their rating, and lets
# everyone read a course's reviews with its average score.
#
# 🧪 Purpose (Technical Summary):
# Review use cases. Eligibility is delegated to ReviewValidationService (active user with an
# ACTIVE or COMPLETED enrollment that has some progress); one review per user and course.
# All methods return ApplicationResult.
#
# 🔗 Dependencies:
# - AbstractUnitOfWork, ReviewValidationService
#
# 🔄 Connected Modules / Calls From:
# - review routes, ApplicationContainer

import logging
from typing import Optional
from uuid import UUID

from app.modules.review.application.commands.review_commands import (
    CreateReviewCommand,
    DeleteReviewCommand,
    UpdateReviewCommand,
)
from app.modules.review.application.dto.review_dto import CourseReviewsDTO
from app.modules.review.domain.models.review import Review
from app.modules.review.domain.services.review_validation_service import ReviewValidationService
from app.shared.core.exceptions import ErrorKind
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.core.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class ReviewApplicationService:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        review_validation_service: Optional[ReviewValidationService] = None,
    ):
        self._uow_factory = uow_factory
        self._validation = review_validation_service or ReviewValidationService()

    @result_boundary("create review")
    async def create_review(self, command: CreateReviewCommand) -> ApplicationResult[Review]:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(command.user_id)
            if user is None:
                return ApplicationResult.fail("User not found", ErrorKind.NOT_FOUND)

            if await uow.courses.get_by_id(command.course_id) is None:
                return ApplicationResult.fail("Course not found", ErrorKind.NOT_FOUND)

            enrollment = await uow.enrollments.get_by_user_and_course(user.id, command.course_id)
            if not self._validation.can_user_review_course(user, enrollment):
                return ApplicationResult.fail(
                    "User must be enrolled and have started the course to review it",
                    ErrorKind.BUSINESS_RULE,
                )

            if await uow.reviews.get_by_user_and_course(user.id, command.course_id) is not None:
                return ApplicationResult.fail("User has already reviewed this course", ErrorKind.CONFLICT)

            review = Review.create(user.id, command.course_id, command.rating, command.comment)
            await uow.reviews.create(review)

        logger.info(f"Review {review.id} ({review.rating}/5) created for course {review.course_id}")
        return ApplicationResult.ok(review)

    @result_boundary("update review")
    async def update_review(self, command: UpdateReviewCommand) -> ApplicationResult[Review]:
        async with self._uow_factory() as uow:
            review = await uow.reviews.get_by_id(command.review_id)
            if review is None:
                return ApplicationResult.fail("Review not found", ErrorKind.NOT_FOUND)
            if not review.can_edit(command.user_id):
                return ApplicationResult.fail("Not authorized to edit this review", ErrorKind.ACCESS_DENIED)

            review.update(rating=command.rating, comment=command.comment)
            await uow.reviews.update(review)
        return ApplicationResult.ok(review)

    @result_boundary("delete review")
    async def delete_review(self, command: DeleteReviewCommand) -> ApplicationResult[bool]:
        async with self._uow_factory() as uow:
            review = await uow.reviews.get_by_id(command.review_id)
            if review is None:
                return ApplicationResult.fail("Review not found", ErrorKind.NOT_FOUND)
            if not (command.is_admin or review.can_edit(command.user_id)):
                return ApplicationResult.fail("Not authorized to delete this review", ErrorKind.ACCESS_DENIED)

            await uow.reviews.delete(review.id)

        logger.info(f"Review {review.id} deleted by {command.user_id}")
        return ApplicationResult.ok(True)

    @result_boundary("get course reviews")
    async def get_course_reviews(
        self,
        course_id: UUID,
        limit: int = 20,
        offset: int = 0,
    ) -> ApplicationResult[CourseReviewsDTO]:
        async with self._uow_factory() as uow:
            reviews = await uow.reviews.get_by_course_id(course_id, limit=limit, offset=offset)
            average, total = await uow.reviews.get_rating_stats(course_id)

        return ApplicationResult.ok(CourseReviewsDTO(
            reviews=reviews,
            average_rating=round(average, 2),
            total_reviews=total,
        ))
