# 📄 File: app/modules/enrollment/domain/models/lesson_progress.py
# 🧭 Purpose (Layman Explanation):
# Tracks one student's progress in one lesson: not started, watching, or done,
# plus how many seconds of the video they watched.
# 🧪 Purpose (Technical Summary):
# LessonProgress entity: NOT_STARTED → IN_PROGRESS on first watch-time update, explicit and
# irreversible → COMPLETED, startedAt backfilled on direct completion, and a per-lesson
# completion percentage rounded half-up.
# 🔗 Dependencies:
# pydantic, uuid, datetime, decimal, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# EnrollmentApplicationService, ProgressCalculationService, LessonProgressRepositoryImpl

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import Field

from app.modules.enrollment.domain.events.enrollment_events import LessonCompleted
from app.shared.core.exceptions import ValidationError
from app.shared.domain.aggregate import AggregateRoot


class ProgressStatus(str, Enum):
    """Lesson progress status"""
    NOT_STARTED = "NOT_STARTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


def percentage_of(part: float, whole: float) -> int:
    """Integer percentage of part/whole, rounded half-up. Zero when whole is zero."""
    if not whole:
        return 0
    ratio = Decimal(str(part)) * 100 / Decimal(str(whole))
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class LessonProgress(AggregateRoot):
    """Progress of one enrollment through one lesson."""

    id: UUID = Field(default_factory=uuid4)
    enrollment_id: UUID
    lesson_id: UUID
    status: ProgressStatus = ProgressStatus.NOT_STARTED
    watch_duration_seconds: int = 0
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, enrollment_id: UUID, lesson_id: UUID) -> "LessonProgress":
        return cls(enrollment_id=enrollment_id, lesson_id=lesson_id)

    def mark_as_started(self) -> None:
        if self.status == ProgressStatus.NOT_STARTED:
            self.status = ProgressStatus.IN_PROGRESS
            self.started_at = datetime.now(timezone.utc)
            self.updated_at = self.started_at

    def update_watch_time(self, seconds: int) -> None:
        """
        Record the total watched seconds for the lesson.

        Raises:
            ValidationError: If seconds is negative
        """
        if seconds < 0:
            raise ValidationError(
                "Watch duration cannot be negative",
                field="watch_duration_seconds",
                value=seconds,
                constraint=">= 0",
            )

        self.mark_as_started()
        self.watch_duration_seconds = seconds
        self.updated_at = datetime.now(timezone.utc)

    def mark_as_completed(self) -> None:
        """Complete the lesson. Already completed progress is left untouched."""
        if self.status == ProgressStatus.COMPLETED:
            return

        now = datetime.now(timezone.utc)
        self.status = ProgressStatus.COMPLETED
        self.completed_at = now
        if self.started_at is None:
            self.started_at = now
        self.updated_at = now
        self.record_event(LessonCompleted(
            aggregate_id=str(self.id),
            payload={"enrollment_id": str(self.enrollment_id), "lesson_id": str(self.lesson_id)},
        ))

    def get_completion_percentage(self, lesson_duration_minutes: int) -> int:
        if self.status == ProgressStatus.COMPLETED:
            return 100
        if self.status == ProgressStatus.NOT_STARTED:
            return 0
        return min(100, percentage_of(self.watch_duration_seconds, lesson_duration_minutes * 60))

    def is_completed(self) -> bool:
        return self.status == ProgressStatus.COMPLETED

    def is_in_progress(self) -> bool:
        return self.status == ProgressStatus.IN_PROGRESS

    def is_not_started(self) -> bool:
        return self.status == ProgressStatus.NOT_STARTED
