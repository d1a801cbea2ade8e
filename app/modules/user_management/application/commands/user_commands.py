# 📄 File: app/modules/user_management/application/commands/user_commands.py
# 🧭 Purpose (Layman Explanation):
# The account "requests" the platform understands: sign up, log in, edit your name or
# picture, and change your password.
#
# 🧪 Purpose (Technical Summary):
# Frozen pydantic command objects for the user and authentication write use cases.
# Passwords arrive in plain text and are hashed by the application service.
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - UserApplicationService, AuthenticationService, auth/users routes

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.user_management.domain.models.user import UserRole


class RegisterUserCommand(BaseModel):
    """Create a new account."""
    model_config = ConfigDict(frozen=True)

    email: str = Field(..., description="Login email (normalized by the domain)")
    password: str = Field(..., min_length=8, max_length=128, description="Plain text password")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = Field(default=UserRole.STUDENT, description="STUDENT or INSTRUCTOR")


class LoginCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    password: str
    user_agent: Optional[str] = Field(None, description="Client user agent bound to the session")
    ip_address: Optional[str] = Field(None, description="Client IP bound to the session")


class UpdateProfileCommand(BaseModel):
    """Partial profile update; omitted fields stay unchanged."""
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    avatar_url: Optional[str] = Field(None, max_length=500)


class ChangePasswordCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    current_password: str
    new_password: str = Field(..., min_length=8, max_length=128)
