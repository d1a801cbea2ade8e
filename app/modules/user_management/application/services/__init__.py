"""User management application services."""

from .authentication_service import AuthenticationService
from .session_service import SessionService
from .user_application_service import UserApplicationService

__all__ = ["AuthenticationService", "SessionService", "UserApplicationService"]
