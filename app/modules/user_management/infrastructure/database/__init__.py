"""SQLAlchemy persistence for user management."""

from .models import SessionModel, UserModel
from .session_repository_impl import SessionRepositoryImpl
from .user_repository_impl import UserRepositoryImpl

__all__ = ["SessionModel", "SessionRepositoryImpl", "UserModel", "UserRepositoryImpl"]
