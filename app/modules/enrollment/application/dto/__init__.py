"""Enrollment DTOs."""

from .enrollment_dto import EnrollmentProgressDTO

__all__ = ["EnrollmentProgressDTO"]
