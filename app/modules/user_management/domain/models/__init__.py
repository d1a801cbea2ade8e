"""User management domain models."""

from .email import Email
from .session import Session
from .user import User, UserRole

__all__ = ["Email", "Session", "User", "UserRole"]
