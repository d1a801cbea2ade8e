# 📄 File: app/modules/user_management/domain/events/user_events.py
# 🧭 Purpose (Layman Explanation):
# Defines the things that can happen to a user account (registered, password changed)
# so other parts of the platform can react to them.
# 🧪 Purpose (Technical Summary):
# Domain events for the user lifecycle, dispatched after commit by UserApplicationService.
# 🔗 Dependencies:
# dataclasses, app.shared.core.event_bus
# 🔄 Connected Modules / Calls From:
# User domain model, UserApplicationService, audit event handler

from dataclasses import dataclass

from app.shared.core.event_bus import DomainEvent


@dataclass
class UserRegistered(DomainEvent):
    """Fired when a new account is created."""
    event_type: str = "user.registered"


@dataclass
class UserPasswordChanged(DomainEvent):
    """Fired after a successful password change."""
    event_type: str = "user.password_changed"


@dataclass
class UserDeactivated(DomainEvent):
    """Fired when an admin deactivates an account."""
    event_type: str = "user.deactivated"
