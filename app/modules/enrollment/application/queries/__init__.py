"""Enrollment queries."""

from .enrollment_queries import EnrollmentProgressQuery, EnrollmentQuery

__all__ = ["EnrollmentProgressQuery", "EnrollmentQuery"]
