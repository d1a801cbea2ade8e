# 📄 File: app/shared/core/result.py
# 🧭 Purpose (Layman Explanation):
# A standard "answer envelope" every business operation returns: either it worked (with data)
# or it failed (with a message and a category such as "not found" or "conflict").
# 🧪 Purpose (Technical Summary):
# Generic immutable ApplicationResult[T] carrying success/data/error plus a discriminated
# ErrorKind, and the result_boundary decorator converting exceptions raised inside an
# application-service coroutine into failed results.
# 🔗 Dependencies:
# dataclasses, functools, typing, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# All application services, presentation routers (raise_for_result), tests

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, TypeVar

from app.shared.core.exceptions import ErrorKind, LMSException, exception_for_kind

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ApplicationResult(Generic[T]):
    """
    Uniform outcome of an application-service call.

    Attributes:
        success: Whether the operation completed
        data: Payload on success
        error: Human readable failure message
        error_kind: Failure category used for HTTP status mapping
        details: Structured failure context
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "ApplicationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        message: str,
        kind: ErrorKind = ErrorKind.UNEXPECTED,
        details: Optional[Dict[str, Any]] = None
    ) -> "ApplicationResult[T]":
        return cls(success=False, error=message, error_kind=kind, details=details or {})

    @classmethod
    def from_exception(cls, exc: Exception) -> "ApplicationResult[T]":
        """Translate any exception into a failed result."""
        if isinstance(exc, LMSException):
            return cls.fail(exc.message, exc.error_kind, exc.details)
        return cls.fail(str(exc) or exc.__class__.__name__, ErrorKind.UNEXPECTED)

    @property
    def is_failure(self) -> bool:
        return not self.success

    def unwrap(self) -> T:
        """Return the payload or raise the exception matching the error kind."""
        if self.success:
            return self.data
        raise exception_for_kind(
            self.error_kind or ErrorKind.UNEXPECTED,
            self.error or "Operation failed",
            self.details,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success}
        if self.success:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
            payload["error_kind"] = self.error_kind.value if self.error_kind else None
        return payload


def result_boundary(operation: str):
    """
    Decorator wrapping an async application-service method in a result boundary.

    The wrapped coroutine may return a plain value (wrapped in ``ok``) or an
    ApplicationResult (passed through). Any exception is logged and turned
    into a failed result, so nothing propagates to the caller.

    Args:
        operation: Human readable operation name used in log lines
    """

    def decorator(
        func: Callable[..., Awaitable[Any]]
    ) -> Callable[..., Awaitable[ApplicationResult]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> ApplicationResult:
            try:
                outcome = await func(*args, **kwargs)
            except LMSException as exc:
                logger.warning(f"{operation} failed ({exc.error_kind.value}): {exc.message}")
                return ApplicationResult.from_exception(exc)
            except Exception as exc:
                logger.error(f"Unexpected error during {operation}: {exc}", exc_info=True)
                return ApplicationResult.from_exception(exc)

            if isinstance(outcome, ApplicationResult):
                return outcome
            return ApplicationResult.ok(outcome)

        return wrapper

    return decorator
