# 📄 File: app/modules/user_management/application/dto/user_dto.py
# 🧭 Purpose (Layman Explanation):
# The bundle handed back after a successful login or token refresh: the two tokens plus
# the account they belong to.
#
# 🧪 Purpose (Technical Summary):
# Immutable DTOs returned by AuthenticationService. The presentation layer turns them into
# response schemas; the password hash never leaves the application layer.
#
# 🔗 Dependencies:
# - pydantic, User domain model
#
# 🔄 Connected Modules / Calls From:
# - AuthenticationService, auth routes

from pydantic import BaseModel, ConfigDict

from app.modules.user_management.domain.models.user import User


class LoginResultDTO(BaseModel):
    """Token pair issued for one session."""
    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: User
