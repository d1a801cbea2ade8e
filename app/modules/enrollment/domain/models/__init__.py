"""Enrollment domain models."""

from .enrollment import Enrollment, EnrollmentStatus
from .lesson_progress import LessonProgress, ProgressStatus, percentage_of

__all__ = ["Enrollment", "EnrollmentStatus", "LessonProgress", "ProgressStatus", "percentage_of"]
