"""Enrollment commands."""

from .enrollment_commands import (
    CancelEnrollmentCommand,
    CompleteLessonCommand,
    EnrollCourseCommand,
    UpdateLessonProgressCommand,
)

__all__ = [
    "CancelEnrollmentCommand",
    "CompleteLessonCommand",
    "EnrollCourseCommand",
    "UpdateLessonProgressCommand",
]
