"""Tests for the enrollment use cases against the in-memory unit of work."""

from decimal import Decimal
from uuid import uuid4

import pytest

from app.modules.course_management.domain.models.course import CourseStatus
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
from app.modules.enrollment.application.services.enrollment_application_service import EnrollmentApplicationService
from app.modules.enrollment.domain.models.enrollment import EnrollmentStatus
from app.modules.enrollment.domain.models.lesson_progress import ProgressStatus
from app.modules.payment.domain.models.payment import TransactionStatus
from app.modules.payment.infrastructure.gateway.midtrans_service import MidtransPaymentService
from app.modules.user_management.domain.models.user import UserRole
from app.shared.core.exceptions import ErrorKind

from tests.fakes import FakeSnapClient, course_lessons


async def _enroll(service, student, course):
    result = await service.enroll_course(EnrollCourseCommand(user_id=student.id, course_id=course.id))
    assert result.success, result.error
    return result.data


async def _complete(service, enrollment, student, lesson):
    return await service.complete_lesson(
        CompleteLessonCommand(enrollment_id=enrollment.id, lesson_id=lesson.id, user_id=student.id)
    )


class TestEnrollCourse:
    """Tests for enroll_course."""

    @pytest.mark.asyncio
    async def test_free_course_enrollment_sets_up_progress(
        self, enrollment_service, database, instructor, student, make_course, recorder
    ):
        course = make_course(instructor, price="0", lessons=3)

        enrollment = await _enroll(enrollment_service, student, course)

        assert enrollment.status == EnrollmentStatus.ACTIVE
        assert enrollment.amount_paid.is_free()
        progresses = database.all("lesson_progress")
        assert len(progresses) == 3
        assert {p.lesson_id for p in progresses} == {lesson.id for lesson in course_lessons(database, course)}
        assert all(p.status == ProgressStatus.NOT_STARTED for p in progresses)
        assert database.all("payments") == []
        assert recorder.types() == ["enrollment.created"]

    @pytest.mark.asyncio
    async def test_enrollment_queues_confirmation_email(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, title="Data Science 101")

        await _enroll(enrollment_service, student, course)

        [email] = database.all("email_outbox")
        assert email.recipient == student.email
        assert email.subject == "Enrollment Confirmed: Data Science 101"

    @pytest.mark.asyncio
    async def test_paid_course_opens_pending_payment(
        self, enrollment_service, database, instructor, student, make_course, snap_client
    ):
        course = make_course(instructor, price="150000")

        enrollment = await _enroll(enrollment_service, student, course)

        [payment] = database.all("payments")
        assert payment.enrollment_id == enrollment.id
        assert payment.status == TransactionStatus.PENDING
        assert payment.gross_amount.amount == Decimal("150000")
        assert payment.snap_token == snap_client.token
        assert payment.order_id.startswith(f"ORDER-{enrollment.id}-")
        assert snap_client.requests[0]["data"]["transaction_details"]["gross_amount"] == 150000

    @pytest.mark.asyncio
    async def test_instructor_enrolls_in_other_course_for_free(
        self, enrollment_service, database, instructor, make_user, make_course
    ):
        other_instructor = make_user(UserRole.INSTRUCTOR)
        course = make_course(instructor, price="99")

        enrollment = await _enroll(enrollment_service, other_instructor, course)

        assert enrollment.amount_paid.is_free()
        assert database.all("payments") == []

    @pytest.mark.asyncio
    async def test_duplicate_enrollment_is_conflict(self, enrollment_service, database, instructor, student, make_course):
        course = make_course(instructor)
        await _enroll(enrollment_service, student, course)

        result = await enrollment_service.enroll_course(EnrollCourseCommand(user_id=student.id, course_id=course.id))

        assert result.is_failure
        assert result.error_kind == ErrorKind.CONFLICT
        assert len(database.all("enrollments")) == 1

    @pytest.mark.asyncio
    async def test_unknown_course_is_not_found(self, enrollment_service, student):
        result = await enrollment_service.enroll_course(EnrollCourseCommand(user_id=student.id, course_id=uuid4()))

        assert result.error_kind == ErrorKind.NOT_FOUND
        assert result.error == "Course not found"

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_found(self, enrollment_service, instructor, make_course):
        course = make_course(instructor)

        result = await enrollment_service.enroll_course(EnrollCourseCommand(user_id=uuid4(), course_id=course.id))

        assert result.error_kind == ErrorKind.NOT_FOUND
        assert result.error == "User not found"

    @pytest.mark.asyncio
    async def test_draft_course_rejected(self, enrollment_service, database, instructor, student, make_course):
        course = make_course(instructor, status=CourseStatus.DRAFT)

        result = await enrollment_service.enroll_course(EnrollCourseCommand(user_id=student.id, course_id=course.id))

        assert result.error_kind == ErrorKind.BUSINESS_RULE
        assert database.all("enrollments") == []

    @pytest.mark.asyncio
    async def test_inactive_user_rejected(self, enrollment_service, instructor, make_user, make_course):
        course = make_course(instructor)
        inactive = make_user(is_active=False)

        result = await enrollment_service.enroll_course(EnrollCourseCommand(user_id=inactive.id, course_id=course.id))

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_payment_failure_leaves_nothing_behind(
        self, settings, uow_factory, dispatcher, database, instructor, student, make_course, recorder
    ):
        gateway = MidtransPaymentService(settings, client=FakeSnapClient(fail=True))
        service = EnrollmentApplicationService(uow_factory, gateway, dispatcher)
        course = make_course(instructor, price="250000")

        result = await service.enroll_course(EnrollCourseCommand(user_id=student.id, course_id=course.id))

        assert result.is_failure
        assert result.error_kind == ErrorKind.EXTERNAL_SERVICE
        assert database.all("enrollments") == []
        assert database.all("lesson_progress") == []
        assert database.all("payments") == []
        assert database.all("email_outbox") == []
        assert database.rollbacks == 1
        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_course_without_lessons_enrolls_with_no_progress_rows(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, lessons=0)

        enrollment = await _enroll(enrollment_service, student, course)

        assert enrollment.progress_percentage == 0
        assert database.all("lesson_progress") == []


class TestLessonProgress:
    """Tests for progress updates and recalculation."""

    @pytest.mark.asyncio
    async def test_two_of_three_lessons_is_67_percent(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, lessons=3)
        enrollment = await _enroll(enrollment_service, student, course)
        lessons = course_lessons(database, course)

        await _complete(enrollment_service, enrollment, student, lessons[0])
        await _complete(enrollment_service, enrollment, student, lessons[1])

        stored = database.tables["enrollments"][enrollment.id]
        assert stored.progress_percentage == 67
        assert stored.status == EnrollmentStatus.ACTIVE

    @pytest.mark.asyncio
    async def test_completing_every_lesson_completes_enrollment(
        self, enrollment_service, database, instructor, student, make_course, recorder
    ):
        course = make_course(instructor, lessons=3)
        enrollment = await _enroll(enrollment_service, student, course)

        for lesson in course_lessons(database, course):
            result = await _complete(enrollment_service, enrollment, student, lesson)
            assert result.success

        stored = database.tables["enrollments"][enrollment.id]
        assert stored.status == EnrollmentStatus.COMPLETED
        assert stored.progress_percentage == 100
        assert stored.completed_at is not None
        assert recorder.types().count("lesson.completed") == 3
        assert recorder.types().count("enrollment.completed") == 1

    @pytest.mark.asyncio
    async def test_watch_time_does_not_count_towards_progress(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, lessons=2)
        enrollment = await _enroll(enrollment_service, student, course)
        lesson = course_lessons(database, course)[0]

        result = await enrollment_service.update_lesson_progress(UpdateLessonProgressCommand(
            enrollment_id=enrollment.id,
            lesson_id=lesson.id,
            user_id=student.id,
            watch_duration_seconds=540,
        ))

        assert result.data.status == ProgressStatus.IN_PROGRESS
        assert result.data.watch_duration_seconds == 540
        assert database.tables["enrollments"][enrollment.id].progress_percentage == 0

    @pytest.mark.asyncio
    async def test_negative_watch_time_is_validation_failure(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, lessons=1)
        enrollment = await _enroll(enrollment_service, student, course)
        lesson = course_lessons(database, course)[0]

        result = await enrollment_service.update_lesson_progress(UpdateLessonProgressCommand(
            enrollment_id=enrollment.id,
            lesson_id=lesson.id,
            user_id=student.id,
            watch_duration_seconds=-10,
        ))

        assert result.error_kind == ErrorKind.VALIDATION
        [progress] = database.all("lesson_progress")
        assert progress.status == ProgressStatus.NOT_STARTED

    @pytest.mark.asyncio
    async def test_completing_same_lesson_twice_is_idempotent(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, lessons=2)
        enrollment = await _enroll(enrollment_service, student, course)
        lesson = course_lessons(database, course)[0]

        await _complete(enrollment_service, enrollment, student, lesson)
        result = await _complete(enrollment_service, enrollment, student, lesson)

        assert result.success
        assert database.tables["enrollments"][enrollment.id].progress_percentage == 50

    @pytest.mark.asyncio
    async def test_other_user_cannot_touch_enrollment(
        self, enrollment_service, database, instructor, student, make_user, make_course
    ):
        course = make_course(instructor, lessons=1)
        enrollment = await _enroll(enrollment_service, student, course)
        intruder = make_user()
        lesson = course_lessons(database, course)[0]

        result = await _complete(enrollment_service, enrollment, intruder, lesson)

        assert result.error_kind == ErrorKind.ACCESS_DENIED
        assert database.all("lesson_progress")[0].status == ProgressStatus.NOT_STARTED

    @pytest.mark.asyncio
    async def test_unknown_lesson_is_not_found(self, enrollment_service, instructor, student, make_course):
        course = make_course(instructor, lessons=1)
        enrollment = await _enroll(enrollment_service, student, course)

        result = await enrollment_service.complete_lesson(
            CompleteLessonCommand(enrollment_id=enrollment.id, lesson_id=uuid4(), user_id=student.id)
        )

        assert result.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_enrollment_is_not_found(self, enrollment_service, student):
        result = await enrollment_service.complete_lesson(
            CompleteLessonCommand(enrollment_id=uuid4(), lesson_id=uuid4(), user_id=student.id)
        )

        assert result.error_kind == ErrorKind.NOT_FOUND
        assert result.error == "Enrollment not found"


class TestEnrollmentReads:
    """Tests for progress and listing reads."""

    @pytest.mark.asyncio
    async def test_progress_view(self, enrollment_service, database, instructor, student, make_course):
        course = make_course(instructor, lessons=4)
        enrollment = await _enroll(enrollment_service, student, course)
        await _complete(enrollment_service, enrollment, student, course_lessons(database, course)[0])

        result = await enrollment_service.get_enrollment_progress(
            EnrollmentProgressQuery(enrollment_id=enrollment.id, user_id=student.id)
        )

        dto = result.unwrap()
        assert dto.total_lessons == 4
        assert dto.completed_lessons == 1
        assert dto.progress_percentage == 25
        assert len(dto.lesson_progresses) == 4

    @pytest.mark.asyncio
    async def test_progress_view_requires_ownership(
        self, enrollment_service, instructor, student, make_user, make_course
    ):
        course = make_course(instructor)
        enrollment = await _enroll(enrollment_service, student, course)

        result = await enrollment_service.get_enrollment_progress(
            EnrollmentProgressQuery(enrollment_id=enrollment.id, user_id=make_user().id)
        )

        assert result.error_kind == ErrorKind.ACCESS_DENIED

    @pytest.mark.asyncio
    async def test_list_filters_by_status(self, enrollment_service, instructor, student, make_course):
        first = make_course(instructor, title="First")
        second = make_course(instructor, title="Second")
        kept = await _enroll(enrollment_service, student, first)
        dropped = await _enroll(enrollment_service, student, second)
        await enrollment_service.cancel_enrollment(
            CancelEnrollmentCommand(enrollment_id=dropped.id, user_id=student.id)
        )

        everything = (await enrollment_service.get_user_enrollments(EnrollmentQuery(user_id=student.id))).unwrap()
        active = (await enrollment_service.get_user_enrollments(
            EnrollmentQuery(user_id=student.id, status=EnrollmentStatus.ACTIVE)
        )).unwrap()

        assert {e.id for e in everything} == {kept.id, dropped.id}
        assert [e.id for e in active] == [kept.id]


class TestCancelEnrollment:
    """Tests for cancel_enrollment."""

    @pytest.mark.asyncio
    async def test_cancel_marks_enrollment_and_pending_payment(
        self, enrollment_service, database, instructor, student, make_course, recorder
    ):
        course = make_course(instructor, price="100")
        enrollment = await _enroll(enrollment_service, student, course)

        result = await enrollment_service.cancel_enrollment(
            CancelEnrollmentCommand(enrollment_id=enrollment.id, user_id=student.id)
        )

        assert result.data.status == EnrollmentStatus.CANCELLED
        [payment] = database.all("payments")
        assert payment.status == TransactionStatus.CANCEL
        assert recorder.types()[-1] == "enrollment.cancelled"

    @pytest.mark.asyncio
    async def test_cancel_keeps_progress_and_amount_paid(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, price="100", lessons=3)
        enrollment = await _enroll(enrollment_service, student, course)
        await _complete(enrollment_service, enrollment, student, course_lessons(database, course)[0])

        result = await enrollment_service.cancel_enrollment(
            CancelEnrollmentCommand(enrollment_id=enrollment.id, user_id=student.id)
        )

        stored = database.tables["enrollments"][enrollment.id]
        assert result.data.status == EnrollmentStatus.CANCELLED
        assert stored.status == EnrollmentStatus.CANCELLED
        assert stored.progress_percentage == 33
        assert str(stored.amount_paid) == "100.00"

    @pytest.mark.asyncio
    async def test_cancel_twice_is_business_rule_failure(self, enrollment_service, instructor, student, make_course):
        course = make_course(instructor)
        enrollment = await _enroll(enrollment_service, student, course)
        command = CancelEnrollmentCommand(enrollment_id=enrollment.id, user_id=student.id)

        await enrollment_service.cancel_enrollment(command)
        result = await enrollment_service.cancel_enrollment(command)

        assert result.error_kind == ErrorKind.BUSINESS_RULE

    @pytest.mark.asyncio
    async def test_cancelled_enrollment_progress_is_not_recalculated_to_completion(
        self, enrollment_service, database, instructor, student, make_course
    ):
        course = make_course(instructor, lessons=1)
        enrollment = await _enroll(enrollment_service, student, course)
        await enrollment_service.cancel_enrollment(
            CancelEnrollmentCommand(enrollment_id=enrollment.id, user_id=student.id)
        )

        await _complete(enrollment_service, enrollment, student, course_lessons(database, course)[0])

        assert database.tables["enrollments"][enrollment.id].status == EnrollmentStatus.CANCELLED
