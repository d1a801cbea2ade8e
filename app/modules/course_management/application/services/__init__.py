"""Course management application services."""

from .course_application_service import CourseApplicationService

__all__ = ["CourseApplicationService"]
