"""Tests for the course catalog use cases and their cache behaviour."""

from decimal import Decimal
from uuid import uuid4

import pytest

from app.modules.course_management.application.commands.course_commands import (
    AddLessonCommand,
    CreateCategoryCommand,
    CreateCourseCommand,
    PublishCourseCommand,
    UpdateCourseCommand,
    UpdateLessonCommand,
)
from app.modules.course_management.application.queries.course_queries import CourseQuery
from app.modules.course_management.application.services.course_application_service import CourseApplicationService
from app.modules.course_management.domain.models.course import Course, CourseLevel, CourseStatus
from app.modules.user_management.domain.models.user import UserRole
from app.shared.config.redis import CacheConfig
from app.shared.core.exceptions import BusinessRuleViolationError, ErrorKind, ValidationError
from app.shared.domain.money import Money

from tests.fakes import course_lessons


@pytest.fixture
def course_service(uow_factory, cache, dispatcher):
    return CourseApplicationService(uow_factory, cache, dispatcher)


def _detail_key(course_id):
    return CacheConfig.get_cache_key("course_detail", course_id=course_id)


class TestCourseAuthoring:
    """Tests for creating, editing and publishing courses."""

    @pytest.mark.asyncio
    async def test_create_course_starts_as_draft(self, course_service, instructor, category):
        result = await course_service.create_course(CreateCourseCommand(
            instructor_id=instructor.id,
            category_id=category.id,
            title="  FastAPI in Practice  ",
            price=Decimal("199000"),
            duration_hours=6,
            level=CourseLevel.INTERMEDIATE,
        ))

        course = result.unwrap()
        assert course.status == CourseStatus.DRAFT
        assert course.title == "FastAPI in Practice"
        assert course.price.amount == Decimal("199000")
        assert course.instructor_id == instructor.id

    @pytest.mark.asyncio
    async def test_student_cannot_create_course(self, course_service, student, category):
        result = await course_service.create_course(CreateCourseCommand(
            instructor_id=student.id,
            category_id=category.id,
            title="Not allowed",
            duration_hours=1,
        ))

        assert result.error_kind == ErrorKind.ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_unknown_category_is_not_found(self, course_service, instructor):
        result = await course_service.create_course(CreateCourseCommand(
            instructor_id=instructor.id,
            category_id=uuid4(),
            title="Orphan",
            duration_hours=1,
        ))

        assert result.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_non_positive_duration_is_validation_failure(self, course_service, instructor, category):
        result = await course_service.create_course(CreateCourseCommand(
            instructor_id=instructor.id,
            category_id=category.id,
            title="Zero",
            duration_hours=0,
        ))

        assert result.error_kind == ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_fractional_price_is_validation_failure(self, course_service, database, instructor, category):
        result = await course_service.create_course(CreateCourseCommand(
            instructor_id=instructor.id,
            category_id=category.id,
            title="Half Priced",
            price=Decimal("99.50"),
            duration_hours=1,
        ))

        assert result.error_kind == ErrorKind.VALIDATION
        assert database.all("courses") == []

    @pytest.mark.asyncio
    async def test_publish_requires_lessons(self, course_service, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.DRAFT, lessons=0)

        result = await course_service.publish_course(
            PublishCourseCommand(course_id=course.id, instructor_id=instructor.id)
        )

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_publish_with_lessons(self, course_service, database, instructor, make_course, recorder):
        course = make_course(instructor, status=CourseStatus.DRAFT, lessons=2)

        result = await course_service.publish_course(
            PublishCourseCommand(course_id=course.id, instructor_id=instructor.id)
        )

        assert result.unwrap().status == CourseStatus.PUBLISHED
        assert database.tables["courses"][course.id].is_published()
        assert recorder.types() == ["course.published"]

    @pytest.mark.asyncio
    async def test_publish_twice_is_business_rule_failure(self, course_service, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.PUBLISHED)

        result = await course_service.publish_course(
            PublishCourseCommand(course_id=course.id, instructor_id=instructor.id)
        )

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_other_instructor_cannot_modify(self, course_service, instructor, make_user, make_course):
        course = make_course(instructor, status=CourseStatus.DRAFT)
        rival = make_user(UserRole.INSTRUCTOR)

        update = await course_service.update_course(
            UpdateCourseCommand(course_id=course.id, instructor_id=rival.id, title="Hijacked")
        )
        archive = await course_service.archive_course(course.id, rival.id)

        assert update.error_kind == ErrorKind.ACCESS_DENIED
        assert archive.error_kind == ErrorKind.ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_published_course_is_locked_for_edits(self, course_service, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.PUBLISHED)

        result = await course_service.update_course(
            UpdateCourseCommand(course_id=course.id, instructor_id=instructor.id, title="Changed")
        )

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_archive_records_event(self, course_service, database, instructor, make_course, recorder):
        course = make_course(instructor)

        await course_service.archive_course(course.id, instructor.id)

        assert database.tables["courses"][course.id].is_archived()
        assert recorder.types() == ["course.archived"]

    @pytest.mark.asyncio
    async def test_unarchive_returns_course_to_draft(self, course_service, cache, database, instructor, make_course, recorder):
        course = make_course(instructor, status=CourseStatus.ARCHIVED)
        await course_service.get_course_by_id(course.id)

        result = await course_service.unarchive_course(course.id, instructor.id)

        assert result.unwrap().status == CourseStatus.DRAFT
        assert database.tables["courses"][course.id].status == CourseStatus.DRAFT
        assert await cache.get(_detail_key(course.id)) is None
        assert recorder.types() == ["course.unarchived"]

    @pytest.mark.asyncio
    async def test_unarchive_requires_archived_course(self, course_service, instructor, make_course, recorder):
        course = make_course(instructor, status=CourseStatus.PUBLISHED)

        result = await course_service.unarchive_course(course.id, instructor.id)

        assert result.error_kind == ErrorKind.BUSINESS_RULE
        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_only_owner_can_unarchive(self, course_service, database, instructor, make_user, make_course):
        course = make_course(instructor, status=CourseStatus.ARCHIVED)
        rival = make_user(UserRole.INSTRUCTOR)

        result = await course_service.unarchive_course(course.id, rival.id)

        assert result.error_kind == ErrorKind.ACCESS_DENIED
        assert database.tables["courses"][course.id].is_archived()

    @pytest.mark.asyncio
    async def test_archive_then_unarchive_allows_republishing(self, course_service, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.PUBLISHED)

        await course_service.archive_course(course.id, instructor.id)
        await course_service.unarchive_course(course.id, instructor.id)
        result = await course_service.publish_course(
            PublishCourseCommand(course_id=course.id, instructor_id=instructor.id)
        )

        assert result.unwrap().status == CourseStatus.PUBLISHED


class TestCourseModel:
    """Tests for the Course lifecycle transitions."""

    def _course(self, price="0"):
        return Course.create(
            instructor_id=uuid4(),
            category_id=uuid4(),
            title="Design Patterns",
            price=Money.create(price),
            duration_hours=3,
        )

    def test_unarchive_moves_archived_course_to_draft(self):
        course = self._course()
        course.archive()
        course.pull_domain_events()

        course.unarchive()

        assert course.status == CourseStatus.DRAFT
        assert [e.event_type for e in course.pull_domain_events()] == ["course.unarchived"]

    def test_unarchive_rejects_active_course(self):
        course = self._course()

        with pytest.raises(BusinessRuleViolationError):
            course.unarchive()

    def test_fractional_price_rejected(self):
        with pytest.raises(ValidationError):
            self._course(price="99.50")


class TestLessons:
    """Tests for lesson management."""

    @pytest.mark.asyncio
    async def test_add_lesson(self, course_service, database, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.DRAFT, lessons=1)

        result = await course_service.add_lesson(AddLessonCommand(
            course_id=course.id,
            instructor_id=instructor.id,
            title="Dependency injection",
            video_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            order_number=2,
            duration_minutes=15,
        ))

        assert result.success
        assert [lesson.title for lesson in course_lessons(database, course)] == ["Lesson 1", "Dependency injection"]

    @pytest.mark.asyncio
    async def test_lesson_duration_must_be_positive(self, course_service, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.DRAFT, lessons=0)

        result = await course_service.add_lesson(AddLessonCommand(
            course_id=course.id,
            instructor_id=instructor.id,
            title="Empty",
            order_number=1,
            duration_minutes=0,
        ))

        assert result.error_kind == ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_update_and_reorder_lesson(self, course_service, database, instructor, make_course):
        course = make_course(instructor, lessons=2)
        first = course_lessons(database, course)[0]

        await course_service.update_lesson(UpdateLessonCommand(
            lesson_id=first.id,
            instructor_id=instructor.id,
            title="Introduction",
            order_number=3,
        ))

        assert [lesson.title for lesson in course_lessons(database, course)] == ["Lesson 2", "Introduction"]

    @pytest.mark.asyncio
    async def test_get_lessons_of_unknown_course(self, course_service):
        result = await course_service.get_course_lessons(uuid4())

        assert result.error_kind == ErrorKind.NOT_FOUND


class TestCatalogReads:
    """Tests for course reads and the read-through cache."""

    @pytest.mark.asyncio
    async def test_course_detail_is_served_from_cache(self, course_service, cache, database, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.DRAFT)
        await course_service.get_course_by_id(course.id)
        database.tables["courses"][course.id].title = "Changed behind the cache"

        result = await course_service.get_course_by_id(course.id)

        assert result.unwrap().title == "Python for Beginners"
        assert await cache.get(_detail_key(course.id)) is not None

    @pytest.mark.asyncio
    async def test_update_invalidates_course_detail(self, course_service, cache, instructor, make_course):
        course = make_course(instructor, status=CourseStatus.DRAFT)
        await course_service.get_course_by_id(course.id)

        await course_service.update_course(
            UpdateCourseCommand(course_id=course.id, instructor_id=instructor.id, title="Python Deep Dive")
        )

        assert await cache.get(_detail_key(course.id)) is None
        assert (await course_service.get_course_by_id(course.id)).unwrap().title == "Python Deep Dive"

    @pytest.mark.asyncio
    async def test_unknown_course_is_not_cached(self, course_service, cache):
        missing = uuid4()

        result = await course_service.get_course_by_id(missing)

        assert result.error_kind == ErrorKind.NOT_FOUND
        assert await cache.get(_detail_key(missing)) is None

    @pytest.mark.asyncio
    async def test_search_filters_and_paginates(self, course_service, instructor, make_course):
        make_course(instructor, title="Python for Beginners")
        make_course(instructor, title="Advanced Python")
        make_course(instructor, title="Rust Basics")
        make_course(instructor, title="Python Drafts", status=CourseStatus.DRAFT)

        page = (await course_service.search_courses(
            CourseQuery(search="python", status=CourseStatus.PUBLISHED, limit=1)
        )).unwrap()

        assert page.total == 2
        assert page.total_pages == 2
        assert page.page == 1
        assert len(page.items) == 1

    @pytest.mark.asyncio
    async def test_search_cache_dropped_when_course_created(
        self, course_service, instructor, category, make_course
    ):
        make_course(instructor, title="Python for Beginners")
        query = CourseQuery(search="python")
        assert (await course_service.search_courses(query)).unwrap().total == 1

        await course_service.create_course(CreateCourseCommand(
            instructor_id=instructor.id,
            category_id=category.id,
            title="Python Testing",
            duration_hours=3,
        ))

        assert (await course_service.search_courses(query)).unwrap().total == 2

    @pytest.mark.asyncio
    async def test_instructor_courses(self, course_service, instructor, make_user, make_course):
        mine = make_course(instructor)
        make_course(make_user(UserRole.INSTRUCTOR))

        courses = (await course_service.get_instructor_courses(instructor.id)).unwrap()

        assert [course.id for course in courses] == [mine.id]


class TestCategories:
    """Tests for category management."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, course_service, category):
        await course_service.create_category(CreateCategoryCommand(name="Data Science", slug="data-science"))

        names = [c.name for c in (await course_service.list_categories()).unwrap()]

        assert names == ["Data Science", "Web Development"]

    @pytest.mark.asyncio
    async def test_duplicate_slug_is_conflict(self, course_service, category):
        result = await course_service.create_category(
            CreateCategoryCommand(name="Web Dev Again", slug="web-development")
        )

        assert result.error_kind == ErrorKind.CONFLICT

    @pytest.mark.asyncio
    async def test_invalid_slug_is_validation_failure(self, course_service):
        result = await course_service.create_category(CreateCategoryCommand(name="Bad", slug="Bad Slug!"))

        assert result.error_kind == ErrorKind.VALIDATION
