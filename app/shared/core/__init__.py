"""
Core package for the LMS application.
Provides the error taxonomy, result envelope, security, unit of work contract,
event dispatching and the dependency container.
"""

from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    BusinessRuleViolationError,
    ConflictError,
    ErrorKind,
    ExternalServiceError,
    LMSException,
    NotFoundError,
    ValidationError,
)
from .result import ApplicationResult, result_boundary

__all__ = [
    "ApplicationResult",
    "AuthenticationError",
    "AuthorizationError",
    "BusinessRuleViolationError",
    "ConflictError",
    "ErrorKind",
    "ExternalServiceError",
    "LMSException",
    "NotFoundError",
    "ValidationError",
    "result_boundary",
]
