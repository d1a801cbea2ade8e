"""Enrollment repository interfaces."""

from .enrollment_repository import EnrollmentRepository
from .lesson_progress_repository import LessonProgressRepository

__all__ = ["EnrollmentRepository", "LessonProgressRepository"]
