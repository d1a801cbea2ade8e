# 📄 File: app/modules/enrollment/presentation/api/v1/enrollments.py
# 🧭 Purpose (Layman Explanation):
# Endpoints a student uses to join a course, record how far they got in each lesson, finish
# lessons, see their progress and leave a course.
#
# 🧪 Purpose (Technical Summary):
# FastAPI routes over EnrollmentApplicationService. Every route acts for the token's subject;
# ownership of the enrollment is enforced by the service.
#
# 🔗 Dependencies:
# - FastAPI router, app.shared.core.dependencies, enrollment_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted under /api/v1/enrollments)

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.modules.enrollment.application.commands.enrollment_commands import (
    CancelEnrollmentCommand,
    CompleteLessonCommand,
    EnrollCourseCommand,
    UpdateLessonProgressCommand,
)
from app.modules.enrollment.application.queries.enrollment_queries import (
    EnrollmentProgressQuery,
    EnrollmentQuery,
)
from app.modules.enrollment.domain.models.enrollment import EnrollmentStatus
from app.modules.enrollment.presentation.api.schemas.enrollment_schemas import (
    EnrollmentProgressResponse,
    EnrollmentResponse,
    EnrollRequest,
    LessonProgressResponse,
    UpdateProgressRequest,
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

enrollments_router = APIRouter()


@enrollments_router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll in a course",
    responses={
        400: {"description": "Course is not open for enrollment"},
        404: {"description": "Course not found"},
        409: {"description": "Already enrolled"},
        502: {"description": "Payment gateway unavailable"},
    },
)
async def enroll(
    enroll_data: EnrollRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> EnrollmentResponse:
    """
    Enroll the current user in a published course.

    Paid courses also open a pending payment; its Snap token is available
    from /payments/enrollments/{enrollment_id}.
    """
    command = EnrollCourseCommand(user_id=current_user.user_id, course_id=enroll_data.course_id)
    enrollment = raise_for_result(await container.enrollment_service.enroll_course(command))
    return EnrollmentResponse.from_domain(enrollment)


@enrollments_router.get("", response_model=List[EnrollmentResponse], summary="List my enrollments")
async def list_enrollments(
    status_filter: Optional[EnrollmentStatus] = Query(None, alias="status"),
    course_id: Optional[UUID] = None,
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> List[EnrollmentResponse]:
    query = EnrollmentQuery(
        user_id=current_user.user_id,
        course_id=course_id,
        status=status_filter,
        **pagination.to_dict(),
    )
    enrollments = raise_for_result(await container.enrollment_service.get_user_enrollments(query))
    return [EnrollmentResponse.from_domain(e) for e in enrollments]


@enrollments_router.get(
    "/{enrollment_id}/progress",
    response_model=EnrollmentProgressResponse,
    summary="Progress of one enrollment",
)
async def get_progress(
    enrollment_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> EnrollmentProgressResponse:
    query = EnrollmentProgressQuery(enrollment_id=enrollment_id, user_id=current_user.user_id)
    return EnrollmentProgressResponse.from_dto(
        raise_for_result(await container.enrollment_service.get_enrollment_progress(query))
    )


@enrollments_router.put(
    "/{enrollment_id}/lessons/{lesson_id}/progress",
    response_model=LessonProgressResponse,
    summary="Record watched time for a lesson",
)
async def update_lesson_progress(
    enrollment_id: UUID,
    lesson_id: UUID,
    progress_data: UpdateProgressRequest,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> LessonProgressResponse:
    command = UpdateLessonProgressCommand(
        enrollment_id=enrollment_id,
        lesson_id=lesson_id,
        user_id=current_user.user_id,
        watch_duration_seconds=progress_data.watch_duration_seconds,
    )
    progress = raise_for_result(await container.enrollment_service.update_lesson_progress(command))
    return LessonProgressResponse.from_domain(progress)


@enrollments_router.post(
    "/{enrollment_id}/lessons/{lesson_id}/complete",
    response_model=LessonProgressResponse,
    summary="Mark a lesson as completed",
)
async def complete_lesson(
    enrollment_id: UUID,
    lesson_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> LessonProgressResponse:
    command = CompleteLessonCommand(enrollment_id=enrollment_id, lesson_id=lesson_id, user_id=current_user.user_id)
    progress = raise_for_result(await container.enrollment_service.complete_lesson(command))
    return LessonProgressResponse.from_domain(progress)


@enrollments_router.post("/{enrollment_id}/cancel", response_model=EnrollmentResponse, summary="Cancel an enrollment")
async def cancel_enrollment(
    enrollment_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> EnrollmentResponse:
    command = CancelEnrollmentCommand(enrollment_id=enrollment_id, user_id=current_user.user_id)
    return EnrollmentResponse.from_domain(raise_for_result(await container.enrollment_service.cancel_enrollment(command)))
