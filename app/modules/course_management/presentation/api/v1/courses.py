# 📄 File: app/modules/course_management/presentation/api/v1/courses.py
# 🧭 Purpose (Layman Explanation):
# The catalog endpoints: browse and search courses, and for instructors to create, edit,
# publish, archive (and restore) and fill their courses with lessons. Admins manage categories.
#
# 🧪 Purpose (Technical Summary):
# FastAPI routes over CourseApplicationService. Reads are public; writes need an
# INSTRUCTOR token and the service checks course ownership. Category creation is ADMIN only.
#
# 🔗 Dependencies:
# - FastAPI router, app.shared.core.dependencies, course_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (courses_router under /api/v1/courses, categories_router under /api/v1/categories)

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.modules.course_management.application.commands.course_commands import (
    AddLessonCommand,
    CreateCategoryCommand,
    CreateCourseCommand,
    PublishCourseCommand,
    UpdateCourseCommand,
    UpdateLessonCommand,
)
from app.modules.course_management.application.queries.course_queries import CourseQuery
from app.modules.course_management.domain.models.course import CourseLevel, CourseStatus
from app.modules.course_management.presentation.api.schemas.course_schemas import (
    AddLessonRequest,
    CategoryResponse,
    CourseListResponse,
    CourseResponse,
    CreateCategoryRequest,
    CreateCourseRequest,
    LessonResponse,
    UpdateCourseRequest,
    UpdateLessonRequest,
)
from app.shared.core.container import ApplicationContainer
from app.shared.core.dependencies import (
    CurrentUser,
    PaginationParams,
    get_container,
    get_current_admin_user,
    get_current_instructor,
    get_pagination_params,
    raise_for_result,
)

logger = logging.getLogger(__name__)

courses_router = APIRouter()
categories_router = APIRouter()


# =========================================================================
# COURSES
# =========================================================================

@courses_router.get("", response_model=CourseListResponse, summary="Search the catalog")
async def search_courses(
    search: Optional[str] = Query(None, max_length=100),
    category_id: Optional[UUID] = None,
    level: Optional[CourseLevel] = None,
    instructor_id: Optional[UUID] = None,
    pagination: PaginationParams = Depends(get_pagination_params),
    container: ApplicationContainer = Depends(get_container),
) -> CourseListResponse:
    """Published courses only, newest first."""
    query = CourseQuery(
        search=search,
        category_id=category_id,
        level=level,
        status=CourseStatus.PUBLISHED,
        instructor_id=instructor_id,
        **pagination.to_dict(),
    )
    return CourseListResponse.from_dto(raise_for_result(await container.course_service.search_courses(query)))


@courses_router.post(
    "",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a draft course",
)
async def create_course(
    course_data: CreateCourseRequest,
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> CourseResponse:
    command = CreateCourseCommand(instructor_id=instructor.user_id, **course_data.model_dump())
    return CourseResponse.from_domain(raise_for_result(await container.course_service.create_course(command)))


@courses_router.get("/mine", response_model=List[CourseResponse], summary="Courses owned by the instructor")
async def get_my_courses(
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> List[CourseResponse]:
    courses = raise_for_result(await container.course_service.get_instructor_courses(instructor.user_id))
    return [CourseResponse.from_domain(c) for c in courses]


@courses_router.get("/{course_id}", response_model=CourseResponse, summary="Get course details")
async def get_course(
    course_id: UUID,
    container: ApplicationContainer = Depends(get_container),
) -> CourseResponse:
    return CourseResponse.from_domain(raise_for_result(await container.course_service.get_course_by_id(course_id)))


@courses_router.patch("/{course_id}", response_model=CourseResponse, summary="Update course details")
async def update_course(
    course_id: UUID,
    course_data: UpdateCourseRequest,
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> CourseResponse:
    command = UpdateCourseCommand(
        course_id=course_id,
        instructor_id=instructor.user_id,
        **course_data.model_dump(exclude_unset=True),
    )
    return CourseResponse.from_domain(raise_for_result(await container.course_service.update_course(command)))


@courses_router.post("/{course_id}/publish", response_model=CourseResponse, summary="Publish a draft course")
async def publish_course(
    course_id: UUID,
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> CourseResponse:
    command = PublishCourseCommand(course_id=course_id, instructor_id=instructor.user_id)
    return CourseResponse.from_domain(raise_for_result(await container.course_service.publish_course(command)))


@courses_router.post("/{course_id}/archive", response_model=CourseResponse, summary="Archive a course")
async def archive_course(
    course_id: UUID,
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> CourseResponse:
    course = raise_for_result(await container.course_service.archive_course(course_id, instructor.user_id))
    return CourseResponse.from_domain(course)


@courses_router.post("/{course_id}/unarchive", response_model=CourseResponse, summary="Return an archived course to draft")
async def unarchive_course(
    course_id: UUID,
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> CourseResponse:
    course = raise_for_result(await container.course_service.unarchive_course(course_id, instructor.user_id))
    return CourseResponse.from_domain(course)


# =========================================================================
# LESSONS
# =========================================================================

@courses_router.get("/{course_id}/lessons", response_model=List[LessonResponse], summary="List course lessons")
async def get_course_lessons(
    course_id: UUID,
    container: ApplicationContainer = Depends(get_container),
) -> List[LessonResponse]:
    lessons = raise_for_result(await container.course_service.get_course_lessons(course_id))
    return [LessonResponse.from_domain(lesson) for lesson in lessons]


@courses_router.post(
    "/{course_id}/lessons",
    response_model=LessonResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a lesson",
)
async def add_lesson(
    course_id: UUID,
    lesson_data: AddLessonRequest,
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> LessonResponse:
    command = AddLessonCommand(course_id=course_id, instructor_id=instructor.user_id, **lesson_data.model_dump())
    return LessonResponse.from_domain(raise_for_result(await container.course_service.add_lesson(command)))


@courses_router.patch("/lessons/{lesson_id}", response_model=LessonResponse, summary="Update a lesson")
async def update_lesson(
    lesson_id: UUID,
    lesson_data: UpdateLessonRequest,
    instructor: CurrentUser = Depends(get_current_instructor),
    container: ApplicationContainer = Depends(get_container),
) -> LessonResponse:
    command = UpdateLessonCommand(
        lesson_id=lesson_id,
        instructor_id=instructor.user_id,
        **lesson_data.model_dump(exclude_unset=True),
    )
    return LessonResponse.from_domain(raise_for_result(await container.course_service.update_lesson(command)))


# =========================================================================
# CATEGORIES
# =========================================================================

@categories_router.get("", response_model=List[CategoryResponse], summary="List categories")
async def list_categories(container: ApplicationContainer = Depends(get_container)) -> List[CategoryResponse]:
    categories = raise_for_result(await container.course_service.list_categories())
    return [CategoryResponse.from_domain(c) for c in categories]


@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    category_data: CreateCategoryRequest,
    admin: CurrentUser = Depends(get_current_admin_user),
    container: ApplicationContainer = Depends(get_container),
) -> CategoryResponse:
    category = raise_for_result(
        await container.course_service.create_category(CreateCategoryCommand(**category_data.model_dump()))
    )
    logger.info(f"Admin {admin.user_id} created category {category.slug}")
    return CategoryResponse.from_domain(category)
