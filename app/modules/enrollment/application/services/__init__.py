"""Enrollment application services."""

from .enrollment_application_service import EnrollmentApplicationService

__all__ = ["EnrollmentApplicationService"]
