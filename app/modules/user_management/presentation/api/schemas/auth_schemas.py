# 📄 File: app/modules/user_management/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the sign-up, sign-in and token renewal forms, and of the answers the
# platform sends back.
#
# 🧪 Purpose (Technical Summary):
# Pydantic v2 request/response schemas for the authentication endpoints. Requests are
# validated here and converted into application commands by the routes.
#
# 🔗 Dependencies:
# - pydantic (EmailStr requires email-validator)
# - user_management application commands and DTOs
#
# 🔄 Connected Modules / Calls From:
# - app.modules.user_management.presentation.api.v1.auth

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.modules.user_management.application.dto.user_dto import LoginResultDTO
from app.modules.user_management.domain.models.session import Session
from app.modules.user_management.domain.models.user import UserRole
from app.modules.user_management.presentation.api.schemas.user_schemas import UserResponse


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class RegisterRequest(BaseModel):
    """New account registration. Admin accounts cannot be self-registered."""

    email: EmailStr = Field(..., description="Login email", examples=["ana@example.com"])
    password: str = Field(..., min_length=8, max_length=128, description="Account password")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = Field(default=UserRole.STUDENT, description="STUDENT or INSTRUCTOR")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ana@example.com",
                "password": "CorrectHorse42",
                "first_name": "Ana",
                "last_name": "Silva",
                "role": "STUDENT",
            }
        }
    )


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=1, max_length=128, description="Account password")


class TokenRefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token issued at login")


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class TokenResponse(BaseModel):
    """Token pair issued at login and on refresh."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserResponse

    @classmethod
    def from_dto(cls, dto: LoginResultDTO) -> "TokenResponse":
        return cls(
            access_token=dto.access_token,
            refresh_token=dto.refresh_token,
            token_type=dto.token_type,
            user=UserResponse.from_domain(dto.user),
        )


class LogoutResponse(BaseModel):
    message: str
    sessions_revoked: int = 1


class SessionResponse(BaseModel):
    id: UUID
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: datetime
    expires_at: datetime
    is_current: bool = False

    @classmethod
    def from_domain(cls, session: Session, current_jti: Optional[str] = None) -> "SessionResponse":
        return cls(
            id=session.id,
            user_agent=session.user_agent,
            ip_address=session.ip_address,
            created_at=session.created_at,
            expires_at=session.expires_at,
            is_current=session.jti == current_jti,
        )


class SessionListResponse(BaseModel):
    sessions: List[SessionResponse]
    total: int
