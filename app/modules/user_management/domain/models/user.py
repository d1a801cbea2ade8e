# 📄 File: app/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is on the learning platform: a student, instructor or admin,
# with a login email, a name and an on/off switch for the account.
# 🧪 Purpose (Technical Summary):
# User aggregate with role-based capability checks, profile updates, activation lifecycle,
# normalized email and a "user.registered" domain event raised on creation.
# 🔗 Dependencies:
# pydantic, uuid, datetime, app.shared.domain, user_management domain events
# 🔄 Connected Modules / Calls From:
# UserApplicationService, AuthenticationService, EnrollmentDomainService,
# CourseApplicationService (instructor checks), UserRepositoryImpl

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from app.modules.user_management.domain.events.user_events import (
    UserDeactivated,
    UserPasswordChanged,
    UserRegistered,
)
from app.modules.user_management.domain.models.email import Email
from app.shared.core.exceptions import ValidationError
from app.shared.domain.aggregate import AggregateRoot


class UserRole(str, Enum):
    """User role enumeration"""
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"
    ADMIN = "ADMIN"


class User(AggregateRoot):
    """
    User domain model.

    The role is fixed at registration; everything else about the
    account can change over its lifetime.
    """

    id: UUID = Field(default_factory=uuid4)
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: UserRole = Field(default=UserRole.STUDENT, frozen=True)
    is_active: bool = True
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return Email.create(v).value

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Name cannot be empty", field="name")
        return v.strip()

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.STUDENT,
    ) -> "User":
        """
        Register a new active user.

        Args:
            email: Raw email address (normalized here)
            password_hash: bcrypt hash produced by the SecurityManager
            first_name: Given name
            last_name: Family name
            role: Account role

        Returns:
            New User with a pending "user.registered" event
        """
        user = cls(
            email=Email.create(email).value,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        user.record_event(UserRegistered(
            aggregate_id=str(user.id),
            payload={"email": user.email, "role": user.role.value},
        ))
        return user

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_instructor(self) -> bool:
        return self.role == UserRole.INSTRUCTOR

    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_create_course(self) -> bool:
        return self.is_instructor() and self.is_active

    def update_profile(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> None:
        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name
        if avatar_url is not None:
            self.avatar_url = avatar_url
        self.updated_at = datetime.now(timezone.utc)

    def change_password_hash(self, password_hash: str) -> None:
        self.password_hash = password_hash
        self.updated_at = datetime.now(timezone.utc)
        self.record_event(UserPasswordChanged(aggregate_id=str(self.id)))

    def activate(self) -> None:
        self.is_active = True
        self.updated_at = datetime.now(timezone.utc)

    def deactivate(self) -> None:
        if not self.is_active:
            return
        self.is_active = False
        self.updated_at = datetime.now(timezone.utc)
        self.record_event(UserDeactivated(aggregate_id=str(self.id)))
