# 📄 File: app/modules/enrollment/application/services/enrollment_application_service.py
# 🧭 Purpose (Layman Explanation):
# The coordinator for everything a student does with a course after finding it: signing up
# (and paying), watching and finishing lessons, checking progress and cancelling.
#
# 🧪 Purpose (Technical Summary):
# Enrollment use-case service. Every write runs in one unit of work: enrollment creation
# commits the enrollment, all lesson-progress rows, the payment row and the confirmation
# email outbox row together, or nothing. Domain events are dispatched only after commit.
# Progress changes trigger an idempotent recalculation of the aggregate percentage which
# drives the ACTIVE → COMPLETED transition. All methods return ApplicationResult.
#
# 🔗 Dependencies:
# - AbstractUnitOfWork factory, PaymentService, EventDispatcher
# - EnrollmentDomainService, ProgressCalculationService
# - OutboxEmail (notifications)
#
# 🔄 Connected Modules / Calls From:
# - enrollment presentation routes, ApplicationContainer, tests

import logging
from typing import List, Optional
from uuid import UUID

from app.modules.enrollment.application.commands.enrollment_commands import (
    CancelEnrollmentCommand,
    CompleteLessonCommand,
    EnrollCourseCommand,
    UpdateLessonProgressCommand,
)
from app.modules.enrollment.application.dto.enrollment_dto import EnrollmentProgressDTO
from app.modules.enrollment.application.queries.enrollment_queries import (
    EnrollmentProgressQuery,
    EnrollmentQuery,
)
from app.modules.enrollment.domain.models.enrollment import Enrollment
from app.modules.enrollment.domain.models.lesson_progress import LessonProgress
from app.modules.enrollment.domain.services.enrollment_domain_service import EnrollmentDomainService
from app.modules.enrollment.domain.services.progress_calculation_service import ProgressCalculationService
from app.modules.notifications.domain.models.outbox_email import OutboxEmail
from app.modules.payment.domain.services.payment_service import PaymentService
from app.shared.core.event_bus import DomainEvent, EventDispatcher
from app.shared.core.exceptions import AuthorizationError, ErrorKind, NotFoundError
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.core.unit_of_work import AbstractUnitOfWork, UnitOfWorkFactory
from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)
audit_logger = get_logger("audit")


class EnrollmentApplicationService:
    """
    Enrollment and progress use cases.

    Operations:
    - enroll_course: eligibility, duplicate check, pricing, atomic setup
    - update_lesson_progress / complete_lesson: ownership-checked progress writes
    - get_enrollment_progress / get_user_enrollments: reads
    - cancel_enrollment: ownership-checked cancellation
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        payment_service: PaymentService,
        event_dispatcher: EventDispatcher,
        enrollment_domain_service: Optional[EnrollmentDomainService] = None,
        progress_calculation_service: Optional[ProgressCalculationService] = None,
    ):
        self._uow_factory = uow_factory
        self._payment_service = payment_service
        self._event_dispatcher = event_dispatcher
        self._enrollment_rules = enrollment_domain_service or EnrollmentDomainService()
        self._progress_calculator = progress_calculation_service or ProgressCalculationService()

    # =========================================================================
    # ENROLLMENT
    # =========================================================================

    @result_boundary("enroll course")
    async def enroll_course(self, command: EnrollCourseCommand) -> ApplicationResult[Enrollment]:
        """
        Enroll a user in a course.

        The enrollment, one NOT_STARTED progress row per lesson, the payment (for a
        non-zero price) and the confirmation email are committed in one transaction.
        A payment gateway failure therefore leaves no enrollment behind.
        """
        async with self._uow_factory() as uow:
            # One session per unit of work: lookups run sequentially
            user = await uow.users.get_by_id(command.user_id)
            if user is None:
                return ApplicationResult.fail("User not found", ErrorKind.NOT_FOUND)

            course = await uow.courses.get_by_id(command.course_id)
            if course is None:
                return ApplicationResult.fail("Course not found", ErrorKind.NOT_FOUND)

            if not self._enrollment_rules.can_user_enroll_course(user, course):
                return ApplicationResult.fail(
                    "User cannot enroll in this course",
                    ErrorKind.BUSINESS_RULE,
                    {"user_id": str(user.id), "course_id": str(course.id)},
                )

            existing = await uow.enrollments.get_by_user_and_course(user.id, course.id)
            if existing is not None:
                return ApplicationResult.fail(
                    "User already enrolled in this course",
                    ErrorKind.CONFLICT,
                    {"enrollment_id": str(existing.id)},
                )

            price = self._enrollment_rules.calculate_enrollment_price(course, user)
            enrollment = Enrollment.create(user.id, course.id, price)
            await uow.enrollments.create(enrollment)

            lessons = await uow.courses.get_course_lessons(course.id)
            await uow.lesson_progress.create_many(
                [LessonProgress.create(enrollment.id, lesson.id) for lesson in lessons]
            )

            if not price.is_free():
                await self._payment_service.create_payment(uow.payments, enrollment.id, price)

            await uow.email_outbox.add(
                OutboxEmail.enrollment_confirmation(user.email, user.first_name, course.title)
            )

        logger.info(
            f"User {user.id} enrolled in course {course.id} "
            f"(enrollment={enrollment.id}, lessons={len(lessons)}, amount={price})"
        )
        audit_logger.log_user_action("enroll_course", str(user.id), resource=f"course:{course.id}")
        await self._dispatch(enrollment.pull_domain_events())
        return ApplicationResult.ok(enrollment)

    # =========================================================================
    # LESSON PROGRESS
    # =========================================================================

    @result_boundary("update lesson progress")
    async def update_lesson_progress(self, command: UpdateLessonProgressCommand) -> ApplicationResult[LessonProgress]:
        async with self._uow_factory() as uow:
            await self._get_owned_enrollment(uow, command.enrollment_id, command.user_id)
            progress = await self._get_lesson_progress(uow, command.enrollment_id, command.lesson_id)

            progress.update_watch_time(command.watch_duration_seconds)
            await uow.lesson_progress.update(progress)

            enrollment = await self._recalculate_enrollment_progress(uow, command.enrollment_id)

        await self._dispatch(progress.pull_domain_events())
        if enrollment is not None:
            await self._dispatch(enrollment.pull_domain_events())
        return ApplicationResult.ok(progress)

    @result_boundary("complete lesson")
    async def complete_lesson(self, command: CompleteLessonCommand) -> ApplicationResult[LessonProgress]:
        async with self._uow_factory() as uow:
            await self._get_owned_enrollment(uow, command.enrollment_id, command.user_id)
            progress = await self._get_lesson_progress(uow, command.enrollment_id, command.lesson_id)

            progress.mark_as_completed()
            await uow.lesson_progress.update(progress)

            enrollment = await self._recalculate_enrollment_progress(uow, command.enrollment_id)

        await self._dispatch(progress.pull_domain_events())
        if enrollment is not None:
            await self._dispatch(enrollment.pull_domain_events())
        return ApplicationResult.ok(progress)

    async def _recalculate_enrollment_progress(
        self,
        uow: AbstractUnitOfWork,
        enrollment_id: UUID,
    ) -> Optional[Enrollment]:
        """
        Recompute the aggregate percentage from the lesson progress rows.

        Idempotent: running it twice on unchanged rows produces the same state.
        Completion is applied only while the enrollment is still ACTIVE.
        """
        enrollment = await uow.enrollments.get_by_id(enrollment_id)
        if enrollment is None:
            return None

        progresses = await uow.lesson_progress.get_by_enrollment_id(enrollment_id)
        new_percentage = self._progress_calculator.calculate_course_progress(progresses, len(progresses))

        enrollment.update_progress(new_percentage)
        if self._progress_calculator.should_complete_enrollment(new_percentage) and enrollment.is_active():
            enrollment.complete()

        await uow.enrollments.update(enrollment)
        logger.debug(f"Enrollment {enrollment_id} progress recalculated: {new_percentage}% ({enrollment.status.value})")
        return enrollment

    # =========================================================================
    # READS
    # =========================================================================

    @result_boundary("get enrollment progress")
    async def get_enrollment_progress(self, query: EnrollmentProgressQuery) -> ApplicationResult[EnrollmentProgressDTO]:
        async with self._uow_factory() as uow:
            enrollment = await self._get_owned_enrollment(uow, query.enrollment_id, query.user_id)
            progresses = await uow.lesson_progress.get_by_enrollment_id(enrollment.id)

        return ApplicationResult.ok(EnrollmentProgressDTO(
            enrollment=enrollment,
            lesson_progresses=progresses,
            completed_lessons=self._progress_calculator.count_completed(progresses),
            total_lessons=len(progresses),
            progress_percentage=enrollment.progress_percentage,
        ))

    @result_boundary("get user enrollments")
    async def get_user_enrollments(self, query: EnrollmentQuery) -> ApplicationResult[List[Enrollment]]:
        async with self._uow_factory() as uow:
            enrollments = await uow.enrollments.get_by_user_id(
                query.user_id,
                status=query.status,
                course_id=query.course_id,
                limit=query.limit,
                offset=query.offset,
            )
        return ApplicationResult.ok(enrollments)

    # =========================================================================
    # CANCELLATION
    # =========================================================================

    @result_boundary("cancel enrollment")
    async def cancel_enrollment(self, command: CancelEnrollmentCommand) -> ApplicationResult[Enrollment]:
        """Cancel an enrollment and any payment still waiting at the gateway."""
        async with self._uow_factory() as uow:
            enrollment = await self._get_owned_enrollment(uow, command.enrollment_id, command.user_id)
            enrollment.cancel()
            await uow.enrollments.update(enrollment)

            for payment in await uow.payments.get_by_enrollment_id(enrollment.id):
                if payment.is_pending():
                    payment.cancel()
                    await uow.payments.update(payment)
                    logger.info(f"Cancelled pending payment {payment.order_id} of enrollment {enrollment.id}")

        audit_logger.log_user_action("cancel_enrollment", str(command.user_id), resource=f"enrollment:{enrollment.id}")
        await self._dispatch(enrollment.pull_domain_events())
        return ApplicationResult.ok(enrollment)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _get_owned_enrollment(self, uow: AbstractUnitOfWork, enrollment_id: UUID, user_id: UUID) -> Enrollment:
        enrollment = await uow.enrollments.get_by_id(enrollment_id)
        if enrollment is None:
            raise NotFoundError("Enrollment not found", resource_type="enrollment", resource_id=str(enrollment_id))
        if not enrollment.is_owned_by(user_id):
            raise AuthorizationError(
                "Access denied",
                resource_type="enrollment",
                resource_id=str(enrollment_id),
                user_id=str(user_id),
            )
        return enrollment

    async def _get_lesson_progress(self, uow: AbstractUnitOfWork, enrollment_id: UUID, lesson_id: UUID) -> LessonProgress:
        progress = await uow.lesson_progress.get_by_enrollment_and_lesson(enrollment_id, lesson_id)
        if progress is None:
            raise NotFoundError("Lesson progress not found", resource_type="lesson_progress", resource_id=str(lesson_id))
        return progress

    async def _dispatch(self, events: List[DomainEvent]) -> None:
        await self._event_dispatcher.dispatch_all(events)
