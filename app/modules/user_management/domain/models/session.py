# 📄 File: app/modules/user_management/domain/models/session.py
# 🧭 Purpose (Layman Explanation):
# A login session: one device where a user is signed in. Sessions expire on their own
# and can be ended early when the user logs out.
# 🧪 Purpose (Technical Summary):
# Session entity keyed by the JWT id (jti) shared by the access/refresh token pair, with
# expiry, revocation and a soft user-agent/IP binding check.
# 🔗 Dependencies:
# pydantic, datetime, uuid, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# SessionService, AuthenticationService, SessionRepositoryImpl

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from app.shared.core.exceptions import BusinessRuleViolationError, ValidationError


class Session(BaseModel):
    """Server side record of an issued token pair."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    jti: str
    is_active: bool = True
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    expires_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        user_id: UUID,
        jti: str,
        expires_at: datetime,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> "Session":
        if not jti or not jti.strip():
            raise ValidationError("JWT ID is required", field="jti")
        if expires_at <= datetime.now(timezone.utc):
            raise ValidationError("Expiration date must be in the future", field="expires_at")

        return cls(
            user_id=user_id,
            jti=jti.strip(),
            expires_at=expires_at,
            user_agent=user_agent or None,
            ip_address=ip_address or None,
        )

    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) > self.expires_at

    def is_valid(self) -> bool:
        return self.is_active and not self.is_expired()

    def matches_request(self, user_agent: Optional[str] = None, ip_address: Optional[str] = None) -> bool:
        """A recorded user agent or IP must match when the request supplies one."""
        if self.user_agent and user_agent and self.user_agent != user_agent:
            return False
        if self.ip_address and ip_address and self.ip_address != ip_address:
            return False
        return True

    def revoke(self) -> None:
        self.is_active = False
        self.updated_at = datetime.now(timezone.utc)

    def reactivate(self) -> None:
        if self.is_expired():
            raise BusinessRuleViolationError("Cannot reactivate expired session")
        self.is_active = True
        self.updated_at = datetime.now(timezone.utc)
