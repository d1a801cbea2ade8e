"""User management domain events."""

from .user_events import UserDeactivated, UserPasswordChanged, UserRegistered

__all__ = ["UserDeactivated", "UserPasswordChanged", "UserRegistered"]
