# 📄 File: app/modules/user_management/application/services/authentication_service.py
# 🧭 Purpose (Layman Explanation):
# Checks passwords at login, hands out the login tokens, renews them, and logs people out
# of one device or all of them.
#
# 🧪 Purpose (Technical Summary):
# Authentication use cases on top of SessionService and SecurityManager. Access and refresh
# tokens carry sub (user id), email, role and the session jti; a token is only honoured while
# its session is valid. All methods return ApplicationResult.
#
# 🔗 Dependencies:
# - SessionService, SecurityManager (python-jose + passlib), AbstractUnitOfWork
#
# 🔄 Connected Modules / Calls From:
# - auth routes, authentication middleware (validate_token), ApplicationContainer

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from app.modules.user_management.application.commands.user_commands import LoginCommand
from app.modules.user_management.application.dto.user_dto import LoginResultDTO
from app.modules.user_management.application.services.session_service import SessionService
from app.modules.user_management.domain.models.user import User
from app.shared.core.exceptions import AuthenticationError, ErrorKind
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.core.security import SecurityManager
from app.shared.core.unit_of_work import UnitOfWorkFactory
from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)
audit_logger = get_logger("audit")


class AuthenticationService:
    """Login, logout, token refresh and token validation."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        session_service: SessionService,
        security_manager: SecurityManager,
    ):
        self._uow_factory = uow_factory
        self._sessions = session_service
        self._security = security_manager

    @result_boundary("login")
    async def login(self, command: LoginCommand) -> ApplicationResult[LoginResultDTO]:
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(command.email)

        if user is None:
            logger.info(f"Login failed: unknown email {command.email}")
            return ApplicationResult.fail("Invalid credentials", ErrorKind.UNAUTHENTICATED)

        if not user.is_active:
            return ApplicationResult.fail("Account is deactivated", ErrorKind.ACCESS_DENIED)

        if not self._security.verify_password(command.password, user.password_hash):
            logger.info(f"Login failed: wrong password for user {user.id}")
            return ApplicationResult.fail("Invalid credentials", ErrorKind.UNAUTHENTICATED)

        session = await self._sessions.create_session(user.id, command.user_agent, command.ip_address)
        audit_logger.log_user_action("login", str(user.id), resource=f"session:{session.id}")
        return ApplicationResult.ok(self._issue_tokens(user, session.jti))

    @result_boundary("logout")
    async def logout(self, jti: str) -> ApplicationResult[bool]:
        if not await self._sessions.revoke_session(jti):
            return ApplicationResult.fail("Session not found", ErrorKind.NOT_FOUND)
        return ApplicationResult.ok(True)

    @result_boundary("logout all sessions")
    async def logout_all_sessions(self, user_id: UUID) -> ApplicationResult[int]:
        return ApplicationResult.ok(await self._sessions.revoke_all_user_sessions(user_id))

    @result_boundary("refresh token")
    async def refresh_token(
        self,
        refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> ApplicationResult[LoginResultDTO]:
        """Issue a new token pair for the same session."""
        try:
            payload = self._security.verify_token(refresh_token, token_type="refresh")
        except AuthenticationError:
            return ApplicationResult.fail("Invalid refresh token", ErrorKind.UNAUTHENTICATED)

        jti = payload.get("jti")
        if not jti or not await self._sessions.validate_session(jti, user_agent, ip_address):
            return ApplicationResult.fail("Invalid or expired session", ErrorKind.UNAUTHENTICATED)

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_id(UUID(payload["sub"]))

        if user is None or not user.is_active:
            return ApplicationResult.fail("User not found or inactive", ErrorKind.UNAUTHENTICATED)

        return ApplicationResult.ok(self._issue_tokens(user, jti))

    @result_boundary("validate token")
    async def validate_token(self, access_token: str) -> ApplicationResult[Dict[str, Any]]:
        """Decode an access token and check that its session is still alive."""
        payload = self._security.verify_token(access_token, token_type="access")

        jti = payload.get("jti")
        if not jti or not await self._sessions.validate_session(jti):
            return ApplicationResult.fail("Session expired or revoked", ErrorKind.UNAUTHENTICATED)
        return ApplicationResult.ok(payload)

    def _issue_tokens(self, user: User, jti: str) -> LoginResultDTO:
        claims = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "jti": jti,
        }
        return LoginResultDTO(
            access_token=self._security.create_access_token(claims),
            refresh_token=self._security.create_refresh_token(claims),
            user=user,
        )
