"""User management repository contracts."""

from .session_repository import SessionRepository
from .user_repository import UserRepository

__all__ = ["SessionRepository", "UserRepository"]
