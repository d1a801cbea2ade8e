"""Enrollment domain events."""

from .enrollment_events import EnrollmentCancelled, EnrollmentCompleted, LessonCompleted, UserEnrolled

__all__ = ["EnrollmentCancelled", "EnrollmentCompleted", "LessonCompleted", "UserEnrolled"]
