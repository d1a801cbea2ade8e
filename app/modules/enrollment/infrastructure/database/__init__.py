"""SQLAlchemy persistence for enrollments and lesson progress."""

from .enrollment_repository_impl import EnrollmentRepositoryImpl
from .lesson_progress_repository_impl import LessonProgressRepositoryImpl
from .models import EnrollmentModel, LessonProgressModel

__all__ = ["EnrollmentModel", "EnrollmentRepositoryImpl", "LessonProgressModel", "LessonProgressRepositoryImpl"]
