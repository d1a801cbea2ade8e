# 📄 File: app/modules/enrollment/domain/models/enrollment.py
# 🧭 Purpose (Layman Explanation):
# A student's registration in one course: what they paid, how far along they are (0 to 100%),
# and whether they are still studying, finished, or cancelled.
# 🧪 Purpose (Technical Summary):
# Enrollment aggregate implementing the ACTIVE → COMPLETED / CANCELLED state machine.
# Progress updates are range-checked and reaching 100 while ACTIVE auto-completes.
# Raises enrollment.created / enrollment.completed / enrollment.cancelled events.
# 🔗 Dependencies:
# pydantic, uuid, datetime, app.shared.domain (Money, AggregateRoot), app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# EnrollmentApplicationService, ReviewValidationService, EnrollmentRepositoryImpl

from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import Field

from app.modules.enrollment.domain.events.enrollment_events import (
    EnrollmentCancelled,
    EnrollmentCompleted,
    UserEnrolled,
)
from app.shared.core.exceptions import BusinessRuleViolationError, ValidationError
from app.shared.domain.aggregate import AggregateRoot
from app.shared.domain.money import Amount, Money


class EnrollmentStatus(str, Enum):
    """Enrollment lifecycle status"""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Enrollment(AggregateRoot):
    """
    Enrollment of one user in one course.

    Invariants:
    - progress_percentage stays within 0..100
    - only ACTIVE enrollments can complete
    - a CANCELLED enrollment cannot be cancelled again
    - amount_paid never changes after creation
    """

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    course_id: UUID
    amount_paid: Money = Field(frozen=True)
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    enrolled_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None
    progress_percentage: int = 0
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, user_id: UUID, course_id: UUID, amount_paid: Union[Money, Amount]) -> "Enrollment":
        """
        Create an ACTIVE enrollment with zero progress.

        Raises:
            ValidationError: If amount_paid is negative
        """
        money = amount_paid if isinstance(amount_paid, Money) else Money.create(amount_paid)
        enrollment = cls(user_id=user_id, course_id=course_id, amount_paid=money)
        enrollment.record_event(UserEnrolled(
            aggregate_id=str(enrollment.id),
            payload={
                "user_id": str(user_id),
                "course_id": str(course_id),
                "amount_paid": str(money),
            },
        ))
        return enrollment

    def update_progress(self, percentage: int) -> None:
        """
        Set the aggregate progress.

        Raises:
            ValidationError: If percentage is outside 0..100
        """
        if percentage < 0 or percentage > 100:
            raise ValidationError(
                "Progress percentage must be between 0 and 100",
                field="progress_percentage",
                value=percentage,
                constraint="0..100",
            )

        self.progress_percentage = percentage
        self.updated_at = datetime.now(timezone.utc)

        if percentage == 100 and self.status == EnrollmentStatus.ACTIVE:
            self.complete()

    def complete(self) -> None:
        if self.status != EnrollmentStatus.ACTIVE:
            raise BusinessRuleViolationError(
                "Only active enrollments can be completed",
                rule="enrollment.complete",
                details={"status": self.status.value},
            )

        now = datetime.now(timezone.utc)
        self.status = EnrollmentStatus.COMPLETED
        self.completed_at = now
        self.progress_percentage = 100
        self.updated_at = now
        self.record_event(EnrollmentCompleted(
            aggregate_id=str(self.id),
            payload={"user_id": str(self.user_id), "course_id": str(self.course_id)},
        ))

    def cancel(self) -> None:
        # COMPLETED enrollments may still be cancelled
        if self.status == EnrollmentStatus.CANCELLED:
            raise BusinessRuleViolationError("Enrollment is already cancelled", rule="enrollment.cancel")

        previous_status = self.status
        self.status = EnrollmentStatus.CANCELLED
        self.updated_at = datetime.now(timezone.utc)
        self.record_event(EnrollmentCancelled(
            aggregate_id=str(self.id),
            payload={
                "user_id": str(self.user_id),
                "course_id": str(self.course_id),
                "previous_status": previous_status.value,
            },
        ))

    def is_active(self) -> bool:
        return self.status == EnrollmentStatus.ACTIVE

    def is_completed(self) -> bool:
        return self.status == EnrollmentStatus.COMPLETED

    def is_cancelled(self) -> bool:
        return self.status == EnrollmentStatus.CANCELLED

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id
