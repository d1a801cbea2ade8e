"""
Common FastAPI dependencies for the LMS application.
Provides container access, the authenticated user, role checks, pagination
and request context helpers.
"""

import logging
from typing import Any, Dict, Optional, TypeVar
from uuid import UUID

from fastapi import Depends, Query, Request

from app.modules.user_management.domain.models.user import UserRole
from app.shared.core.container import ApplicationContainer
from app.shared.core.exceptions import AuthenticationError, AuthorizationError
from app.shared.core.result import ApplicationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CurrentUser:
    """User information extracted from a validated access token."""

    def __init__(
        self,
        user_id: UUID,
        email: str,
        role: UserRole,
        jti: str,
        token_payload: Optional[Dict[str, Any]] = None
    ):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.jti = jti
        self.token_payload = token_payload or {}

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_instructor(self) -> bool:
        return self.role == UserRole.INSTRUCTOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": str(self.user_id),
            "email": self.email,
            "role": self.role.value,
        }


def get_container(request: Request) -> ApplicationContainer:
    """The application container built at startup."""
    return request.app.state.container


async def get_current_user(request: Request) -> CurrentUser:
    """
    Get current authenticated user from request state.
    This dependency assumes AuthenticationMiddleware has already validated the token.

    Raises:
        AuthenticationError: If the request carries no valid access token
    """
    payload = getattr(request.state, "token_payload", None)
    if not payload:
        raise AuthenticationError("Not authenticated")

    try:
        return CurrentUser(
            user_id=UUID(payload["sub"]),
            email=payload.get("email", ""),
            role=UserRole(payload.get("role", UserRole.STUDENT.value)),
            jti=payload.get("jti", ""),
            token_payload=payload,
        )
    except (KeyError, ValueError) as e:
        logger.warning(f"Malformed token payload: {e}")
        raise AuthenticationError("Could not validate credentials")


def require_role(*roles: UserRole):
    """
    Dependency factory for role-based authorization.

    Args:
        roles: Any of these roles grants access
    """

    async def role_dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            logger.warning(f"User {current_user.user_id} lacks required role: {[r.value for r in roles]}")
            raise AuthorizationError(
                f"Access denied. Required role: {', '.join(r.value for r in roles)}",
                user_id=str(current_user.user_id),
            )
        return current_user

    return role_dependency


get_current_admin_user = require_role(UserRole.ADMIN)
get_current_instructor = require_role(UserRole.INSTRUCTOR)


def raise_for_result(result: ApplicationResult[T]) -> T:
    """Return the payload of a successful result or raise the matching LMSException."""
    return result.unwrap()


class PaginationParams:
    """Pagination parameters for list endpoints."""

    def __init__(self, limit: int = 20, offset: int = 0):
        self.limit = limit
        self.offset = offset

    def to_dict(self) -> Dict[str, int]:
        return {"limit": self.limit, "offset": self.offset}


def get_pagination_params(
    limit: int = Query(20, ge=1, le=100, description="Page size"),
    offset: int = Query(0, ge=0, description="Items to skip"),
) -> PaginationParams:
    return PaginationParams(limit=limit, offset=offset)


# Request context dependencies

def get_client_ip(request: Request) -> Optional[str]:
    """Client IP address, honouring reverse proxy headers."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else None


def get_user_agent(request: Request) -> Optional[str]:
    return request.headers.get("User-Agent")
