# 📄 File: app/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of account information shown to users and of the profile and password forms.
#
# 🧪 Purpose (Technical Summary):
# Pydantic v2 schemas for the user endpoints. UserResponse never exposes the password hash.
#
# 🔗 Dependencies:
# - pydantic, user_management domain User
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.users, auth_schemas

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.modules.user_management.domain.models.user import User, UserRole


class UserResponse(BaseModel):
    """Public view of an account."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: UserRole
    is_active: bool
    avatar_url: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=f"{user.first_name} {user.last_name}",
            role=user.role,
            is_active=user.is_active,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
        )


class UpdateProfileRequest(BaseModel):
    """Partial profile update; omitted fields stay unchanged."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    avatar_url: Optional[str] = Field(None, max_length=500)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)


class MessageResponse(BaseModel):
    message: str
