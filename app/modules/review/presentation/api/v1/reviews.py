# 📄 File: app/modules/review/presentation/api/v1/reviews.py
# 🧭 Purpose (Layman Explanation):
# Endpoints for reading a course's reviews and for students to rate a course they took.
#
# 🧪 Purpose (Technical Summary):
# FastAPI routes over ReviewApplicationService. Listing is public; writing requires a token
# and an ACTIVE or COMPLETED enrollment. Authors edit their own reviews; admins may delete any.
#
# 🔗 Dependencies:
# - FastAPI router, app.shared.core.dependencies, review_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (course_reviews_router under /api/v1/courses, reviews_router under /api/v1/reviews)

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.modules.review.application.commands.review_commands import (
    CreateReviewCommand,
    DeleteReviewCommand,
    UpdateReviewCommand,
)
from app.modules.review.presentation.api.schemas.review_schemas import (
    CourseReviewsResponse,
    CreateReviewRequest,
    ReviewResponse,
    UpdateReviewRequest,
)
from app.shared.core.container import ApplicationContainer
from app.shared.core.dependencies import (
    CurrentUser,
    PaginationParams,
    get_container,
    get_current_user,
    get_pagination_params,
    raise_for_result,
)

course_reviews_router = APIRouter()
reviews_router = APIRouter()


@course_reviews_router.get("/{course_id}/reviews", response_model=CourseReviewsResponse, summary="Course reviews")
async def get_course_reviews(
    course_id: UUID,
    pagination: PaginationParams = Depends(get_pagination_params),
    container: ApplicationContainer = Depends(get_container),
) -> CourseReviewsResponse:
    result = await container.review_service.get_course_reviews(course_id, pagination.limit, pagination.offset)
    return CourseReviewsResponse.from_dto(raise_for_result(result))


@course_reviews_router.post(
    "/{course_id}/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a course",
)
async def create_review(
    course_id: UUID,
    review_data: CreateReviewRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> ReviewResponse:
    command = CreateReviewCommand(
        user_id=current_user.user_id,
        course_id=course_id,
        rating=review_data.rating,
        comment=review_data.comment,
    )
    return ReviewResponse.from_domain(raise_for_result(await container.review_service.create_review(command)))


@reviews_router.patch("/{review_id}", response_model=ReviewResponse, summary="Edit your review")
async def update_review(
    review_id: UUID,
    review_data: UpdateReviewRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> ReviewResponse:
    command = UpdateReviewCommand(
        review_id=review_id,
        user_id=current_user.user_id,
        **review_data.model_dump(exclude_unset=True),
    )
    return ReviewResponse.from_domain(raise_for_result(await container.review_service.update_review(command)))


@reviews_router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a review")
async def delete_review(
    review_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> None:
    command = DeleteReviewCommand(review_id=review_id, user_id=current_user.user_id, is_admin=current_user.is_admin())
    raise_for_result(await container.review_service.delete_review(command))
