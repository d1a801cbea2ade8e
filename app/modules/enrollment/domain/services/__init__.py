"""Enrollment domain services."""

from .enrollment_domain_service import EnrollmentDomainService
from .progress_calculation_service import ProgressCalculationService

__all__ = ["EnrollmentDomainService", "ProgressCalculationService"]
