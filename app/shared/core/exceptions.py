# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types the learning platform uses to say
# exactly what went wrong (missing course, duplicate enrollment, bad input) instead of generic errors.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy where every error carries an HTTP status code, a
# discriminated ErrorKind, structured details, and serialization for API responses.
# 🔗 Dependencies:
# FastAPI status constants, typing, enum
# 🔄 Connected Modules / Calls From:
# Domain entities, application services (via ApplicationResult), repositories,
# presentation layer (raise_for_result) and the global exception handler in app.main

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Type

from fastapi import status


class ErrorKind(str, Enum):
    """Discriminated failure categories shared by exceptions and results."""
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    UNAUTHENTICATED = "unauthenticated"
    EXTERNAL_SERVICE = "external_service"
    UNEXPECTED = "unexpected"


class LMSException(Exception):
    """
    Base exception class for the LMS application.
    All custom exceptions should inherit from this class.
    """

    error_kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        self.timestamp = datetime.now(timezone.utc)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "kind": self.error_kind.value,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(LMSException):
    """
    Exception raised for authentication failures.
    Used when credentials or tokens are invalid or missing.
    """

    error_kind = ErrorKind.UNAUTHENTICATED

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None
    ):
        if not details:
            details = {}
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(LMSException):
    """
    Exception raised for authorization failures.
    Used when a user touches a resource they do not own.
    """

    error_kind = ErrorKind.ACCESS_DENIED

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# VALIDATION & RESOURCE EXCEPTIONS
# =============================================================================

class ValidationError(LMSException):
    """
    Exception raised for domain validation failures
    (out-of-range percentages, negative amounts, malformed slugs...).
    """

    error_kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        constraint: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if constraint:
            details["constraint"] = constraint

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(LMSException):
    """Exception raised when a requested resource does not exist."""

    error_kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message or f"{resource_type or 'Resource'} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class ConflictError(LMSException):
    """Exception raised when a resource already exists or state conflicts."""

    error_kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "Resource conflict",
        resource_type: Optional[str] = None,
        conflicting_field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if conflicting_field:
            details["conflicting_field"] = conflicting_field

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="CONFLICT"
        )


class BusinessRuleViolationError(LMSException):
    """Exception raised when a state transition or business rule is violated."""

    error_kind = ErrorKind.BUSINESS_RULE

    def __init__(
        self,
        message: str,
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if rule:
            details["rule"] = rule

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="BUSINESS_RULE_VIOLATION"
        )


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(LMSException):
    """Exception raised when a third-party API fails."""

    error_kind = ErrorKind.EXTERNAL_SERVICE

    def __init__(
        self,
        message: str,
        service_name: Optional[str] = None,
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if service_name:
            details["service"] = service_name
        if upstream_status is not None:
            details["upstream_status"] = upstream_status

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code="EXTERNAL_SERVICE_ERROR"
        )


class PaymentError(ExternalServiceError):
    """Exception raised when the payment gateway rejects or fails a request."""

    def __init__(
        self,
        message: str = "Payment gateway error",
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            service_name="midtrans",
            upstream_status=upstream_status,
            details=details,
        )
        self.error_code = "PAYMENT_ERROR"


# =============================================================================
# PERSISTENCE EXCEPTIONS
# =============================================================================

class DatabaseError(LMSException):
    """Exception raised for database level failures."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code="DATABASE_ERROR"
        )


class RepositoryError(DatabaseError):
    """Exception raised by repository implementations wrapping ORM errors."""

    def __init__(
        self,
        message: str = "Repository operation failed",
        repository: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if repository:
            details["repository"] = repository

        super().__init__(message=message, operation=operation, details=details)
        self.error_code = "REPOSITORY_ERROR"


class TransactionError(DatabaseError):
    """Exception raised when a unit of work cannot commit or roll back."""

    def __init__(self, message: str = "Transaction failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, operation="transaction", details=details)
        self.error_code = "TRANSACTION_ERROR"


# =============================================================================
# KIND → EXCEPTION MAPPING
# =============================================================================

_EXCEPTION_BY_KIND: Dict[ErrorKind, Type[LMSException]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.ACCESS_DENIED: AuthorizationError,
    ErrorKind.CONFLICT: ConflictError,
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.BUSINESS_RULE: BusinessRuleViolationError,
    ErrorKind.UNAUTHENTICATED: AuthenticationError,
    ErrorKind.EXTERNAL_SERVICE: ExternalServiceError,
}


def exception_for_kind(
    kind: ErrorKind,
    message: str,
    details: Optional[Dict[str, Any]] = None
) -> LMSException:
    """
    Build the exception matching an error kind.

    Used by the presentation layer to turn a failed ApplicationResult
    back into an HTTP error with a deterministic status code.
    """
    exception_class = _EXCEPTION_BY_KIND.get(kind)
    if exception_class is None:
        return LMSException(message=message, details=details, error_code="INTERNAL_ERROR")
    return exception_class(message=message, details=details)
