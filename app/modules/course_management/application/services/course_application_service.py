# 📄 File: app/modules/course_management/application/services/course_application_service.py
# 🧭 Purpose (Layman Explanation):
# Runs the course catalog: instructors build courses and lessons, publish or archive them,
# and students browse and search what is available.
#
# 🧪 Purpose (Technical Summary):
# Course, lesson and category use cases with ownership checks, a read-through cache for
# course details (`course:{id}`) and invalidation of cached listings (`courses:*`) on every
# write. All methods return ApplicationResult.
#
# 🔗 Dependencies:
# - AbstractUnitOfWork, CacheService (Redis), EventDispatcher, CacheConfig key patterns
#
# 🔄 Connected Modules / Calls From:
# - course/category routes, ApplicationContainer

import hashlib
import logging
from typing import List, Optional
from uuid import UUID

from app.modules.course_management.application.commands.course_commands import (
    AddLessonCommand,
    CreateCategoryCommand,
    CreateCourseCommand,
    PublishCourseCommand,
    UpdateCourseCommand,
    UpdateLessonCommand,
)
from app.modules.course_management.application.dto.course_dto import PaginatedCoursesDTO
from app.modules.course_management.application.queries.course_queries import CourseQuery
from app.modules.course_management.domain.models.category import Category
from app.modules.course_management.domain.models.course import Course
from app.modules.course_management.domain.models.lesson import Lesson
from app.modules.course_management.domain.repositories.course_repository import CourseSearchCriteria
from app.shared.config.redis import CacheConfig
from app.shared.core.event_bus import EventDispatcher
from app.shared.core.exceptions import AuthorizationError, ErrorKind, NotFoundError
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.core.unit_of_work import AbstractUnitOfWork, UnitOfWorkFactory
from app.shared.domain.money import Money
from app.shared.infrastructure.cache import CacheService

logger = logging.getLogger(__name__)

COURSE_LISTING_PATTERN = CacheConfig.INVALIDATION_PATTERNS["course_listing"]


class CourseApplicationService:
    """
    Course catalog use cases.

    Ownership: only the instructor who owns a course may change it or its lessons.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        cache: CacheService,
        event_dispatcher: EventDispatcher,
        course_ttl: Optional[int] = None,
    ):
        self._uow_factory = uow_factory
        self._cache = cache
        self._event_dispatcher = event_dispatcher
        self._course_ttl = course_ttl or CacheConfig.get_ttl("course_detail")

    # =========================================================================
    # COURSES
    # =========================================================================

    @result_boundary("create course")
    async def create_course(self, command: CreateCourseCommand) -> ApplicationResult[Course]:
        async with self._uow_factory() as uow:
            instructor = await uow.users.get_by_id(command.instructor_id)
            if instructor is None or not instructor.can_create_course():
                return ApplicationResult.fail(
                    "Instructor not found or not authorized to create courses",
                    ErrorKind.ACCESS_DENIED,
                )

            if await uow.categories.get_by_id(command.category_id) is None:
                return ApplicationResult.fail("Category not found", ErrorKind.NOT_FOUND)

            course = Course.create(
                instructor_id=command.instructor_id,
                category_id=command.category_id,
                title=command.title,
                price=Money.create(command.price),
                duration_hours=command.duration_hours,
                level=command.level,
                description=command.description,
                thumbnail_url=command.thumbnail_url,
            )
            await uow.courses.create(course)

        logger.info(f"Course {course.id} created by instructor {command.instructor_id}")
        await self._cache.delete_pattern(COURSE_LISTING_PATTERN)
        return ApplicationResult.ok(course)

    @result_boundary("update course")
    async def update_course(self, command: UpdateCourseCommand) -> ApplicationResult[Course]:
        async with self._uow_factory() as uow:
            course = await self._get_owned_course(
                uow, command.course_id, command.instructor_id, "Not authorized to update this course"
            )
            course.update(
                title=command.title,
                description=command.description,
                thumbnail_url=command.thumbnail_url,
                duration_hours=command.duration_hours,
            )
            await uow.courses.update(course)

        await self._invalidate_course(course.id)
        return ApplicationResult.ok(course)

    @result_boundary("publish course")
    async def publish_course(self, command: PublishCourseCommand) -> ApplicationResult[Course]:
        async with self._uow_factory() as uow:
            course = await self._get_owned_course(
                uow, command.course_id, command.instructor_id, "Not authorized to publish this course"
            )
            if await uow.lessons.count_by_course(course.id) == 0:
                return ApplicationResult.fail(
                    "Course must have at least one lesson before publishing",
                    ErrorKind.BUSINESS_RULE,
                )
            course.publish()
            await uow.courses.update(course)

        logger.info(f"Course {course.id} published")
        await self._invalidate_course(course.id)
        await self._event_dispatcher.dispatch_all(course.pull_domain_events())
        return ApplicationResult.ok(course)

    @result_boundary("archive course")
    async def archive_course(self, course_id: UUID, instructor_id: UUID) -> ApplicationResult[Course]:
        async with self._uow_factory() as uow:
            course = await self._get_owned_course(
                uow, course_id, instructor_id, "Not authorized to archive this course"
            )
            course.archive()
            await uow.courses.update(course)

        await self._invalidate_course(course.id)
        await self._event_dispatcher.dispatch_all(course.pull_domain_events())
        return ApplicationResult.ok(course)

    @result_boundary("unarchive course")
    async def unarchive_course(self, course_id: UUID, instructor_id: UUID) -> ApplicationResult[Course]:
        """Bring an archived course back as a draft so it can be edited and published again."""
        async with self._uow_factory() as uow:
            course = await self._get_owned_course(
                uow, course_id, instructor_id, "Not authorized to unarchive this course"
            )
            course.unarchive()
            await uow.courses.update(course)

        logger.info(f"Course {course.id} unarchived")
        await self._invalidate_course(course.id)
        await self._event_dispatcher.dispatch_all(course.pull_domain_events())
        return ApplicationResult.ok(course)

    @result_boundary("get course")
    async def get_course_by_id(self, course_id: UUID) -> ApplicationResult[Course]:
        cache_key = CacheConfig.get_cache_key("course_detail", course_id=course_id)
        cached = await self._cache.get(cache_key)
        if cached:
            logger.debug(f"Cache hit: {cache_key}")
            return ApplicationResult.ok(Course.model_validate(cached))

        async with self._uow_factory() as uow:
            course = await uow.courses.get_by_id(course_id)
        if course is None:
            return ApplicationResult.fail("Course not found", ErrorKind.NOT_FOUND)

        await self._cache.set(cache_key, course.model_dump(mode="json"), ttl=self._course_ttl)
        return ApplicationResult.ok(course)

    @result_boundary("search courses")
    async def search_courses(self, query: CourseQuery) -> ApplicationResult[PaginatedCoursesDTO]:
        query_hash = hashlib.sha256(query.model_dump_json().encode("utf-8")).hexdigest()[:32]
        cache_key = CacheConfig.get_cache_key("course_listing", query_hash=query_hash)
        cached = await self._cache.get(cache_key)
        if cached:
            logger.debug(f"Cache hit: {cache_key}")
            return ApplicationResult.ok(PaginatedCoursesDTO.model_validate(cached))

        criteria = CourseSearchCriteria(
            search=query.search,
            category_id=query.category_id,
            instructor_id=query.instructor_id,
            level=query.level,
            status=query.status,
            limit=query.limit,
            offset=query.offset,
        )
        async with self._uow_factory() as uow:
            courses, total = await uow.courses.search(criteria)

        page = PaginatedCoursesDTO.build(courses, total, query.limit, query.offset)
        await self._cache.set(cache_key, page.model_dump(mode="json"), ttl=CacheConfig.get_ttl("course_listing"))
        return ApplicationResult.ok(page)

    @result_boundary("get instructor courses")
    async def get_instructor_courses(self, instructor_id: UUID) -> ApplicationResult[List[Course]]:
        async with self._uow_factory() as uow:
            courses = await uow.courses.get_by_instructor(instructor_id)
        return ApplicationResult.ok(courses)

    # =========================================================================
    # LESSONS
    # =========================================================================

    @result_boundary("add lesson")
    async def add_lesson(self, command: AddLessonCommand) -> ApplicationResult[Lesson]:
        async with self._uow_factory() as uow:
            course = await self._get_owned_course(
                uow, command.course_id, command.instructor_id, "Not authorized to modify this course"
            )
            lesson = Lesson(
                course_id=course.id,
                title=command.title,
                description=command.description,
                video_url=command.video_url,
                content=command.content,
                order_number=command.order_number,
                duration_minutes=command.duration_minutes,
                is_preview=command.is_preview,
            )
            await uow.lessons.create(lesson)

        logger.info(f"Lesson {lesson.id} added to course {course.id} at position {lesson.order_number}")
        await self._invalidate_course(course.id)
        return ApplicationResult.ok(lesson)

    @result_boundary("update lesson")
    async def update_lesson(self, command: UpdateLessonCommand) -> ApplicationResult[Lesson]:
        async with self._uow_factory() as uow:
            lesson = await uow.lessons.get_by_id(command.lesson_id)
            if lesson is None:
                return ApplicationResult.fail("Lesson not found", ErrorKind.NOT_FOUND)

            await self._get_owned_course(
                uow, lesson.course_id, command.instructor_id, "Not authorized to modify this course"
            )
            lesson.update(
                title=command.title,
                description=command.description,
                video_url=command.video_url,
                content=command.content,
                duration_minutes=command.duration_minutes,
                is_preview=command.is_preview,
            )
            if command.order_number is not None:
                lesson.reorder(command.order_number)
            await uow.lessons.update(lesson)

        await self._invalidate_course(lesson.course_id)
        return ApplicationResult.ok(lesson)

    @result_boundary("get course lessons")
    async def get_course_lessons(self, course_id: UUID) -> ApplicationResult[List[Lesson]]:
        async with self._uow_factory() as uow:
            if await uow.courses.get_by_id(course_id) is None:
                return ApplicationResult.fail("Course not found", ErrorKind.NOT_FOUND)
            lessons = await uow.lessons.get_by_course_id(course_id)
        return ApplicationResult.ok(lessons)

    # =========================================================================
    # CATEGORIES
    # =========================================================================

    @result_boundary("create category")
    async def create_category(self, command: CreateCategoryCommand) -> ApplicationResult[Category]:
        async with self._uow_factory() as uow:
            if await uow.categories.get_by_slug(command.slug) is not None:
                return ApplicationResult.fail("Category slug already exists", ErrorKind.CONFLICT)

            category = Category(name=command.name, slug=command.slug, description=command.description)
            await uow.categories.create(category)
        return ApplicationResult.ok(category)

    @result_boundary("list categories")
    async def list_categories(self) -> ApplicationResult[List[Category]]:
        async with self._uow_factory() as uow:
            categories = await uow.categories.list_all()
        return ApplicationResult.ok(categories)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_owned_course(
        self,
        uow: AbstractUnitOfWork,
        course_id: UUID,
        instructor_id: UUID,
        denial_message: str,
    ) -> Course:
        course = await uow.courses.get_by_id(course_id)
        if course is None:
            raise NotFoundError("Course not found", resource_type="course", resource_id=str(course_id))
        if not course.is_owned_by(instructor_id):
            raise AuthorizationError(
                denial_message,
                resource_type="course",
                resource_id=str(course_id),
                user_id=str(instructor_id),
            )
        return course

    async def _invalidate_course(self, course_id: UUID) -> None:
        await self._cache.delete(CacheConfig.get_cache_key("course_detail", course_id=course_id))
        await self._cache.delete_pattern(COURSE_LISTING_PATTERN)
