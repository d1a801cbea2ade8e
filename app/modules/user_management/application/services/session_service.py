# 📄 File: app/modules/user_management/application/services/session_service.py
# 🧭 Purpose (Layman Explanation):
# Keeps track of where each user is logged in, so a stolen or old token can be switched off
# and expired logins get cleaned up.
#
# 🧪 Purpose (Technical Summary):
# Session lifecycle service. A session lives as long as the refresh token and is keyed by
# the JWT id (jti) embedded in both tokens of the pair. Each method runs in its own unit
# of work.
#
# 🔗 Dependencies:
# - Session domain model, AbstractUnitOfWork, SecurityManager (token lifetimes)
#
# 🔄 Connected Modules / Calls From:
# - AuthenticationService, auth routes (active sessions), celery session cleanup task

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID, uuid4

from app.modules.user_management.domain.models.session import Session
from app.shared.core.security import SecurityManager
from app.shared.core.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class SessionService:
    """Creates, validates and revokes login sessions."""

    def __init__(self, uow_factory: UnitOfWorkFactory, security_manager: SecurityManager):
        self._uow_factory = uow_factory
        self._security = security_manager

    async def create_session(
        self,
        user_id: UUID,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Session:
        session = Session.create(
            user_id=user_id,
            jti=str(uuid4()),
            expires_at=datetime.now(timezone.utc) + self._security.refresh_token_ttl,
            user_agent=user_agent,
            ip_address=ip_address,
        )
        async with self._uow_factory() as uow:
            await uow.sessions.create(session)

        logger.info(f"Session {session.id} created for user {user_id}")
        return session

    async def validate_session(
        self,
        jti: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> bool:
        """A session is valid when it exists, is active, unexpired and bound to the same client."""
        async with self._uow_factory() as uow:
            session = await uow.sessions.get_by_jti(jti)

        if session is None or not session.is_valid():
            return False
        if not session.matches_request(user_agent, ip_address):
            logger.warning(f"Session mismatch detected for jti {jti}")
            return False
        return True

    async def revoke_session(self, jti: str) -> bool:
        async with self._uow_factory() as uow:
            session = await uow.sessions.get_by_jti(jti)
            if session is None:
                return False
            session.revoke()
            await uow.sessions.update(session)

        logger.info(f"Session {session.id} revoked")
        return True

    async def revoke_all_user_sessions(self, user_id: UUID) -> int:
        revoked = 0
        async with self._uow_factory() as uow:
            for session in await uow.sessions.get_by_user_id(user_id):
                if session.is_active:
                    session.revoke()
                    await uow.sessions.update(session)
                    revoked += 1

        logger.info(f"Revoked {revoked} sessions for user {user_id}")
        return revoked

    async def get_user_active_sessions(self, user_id: UUID) -> List[Session]:
        async with self._uow_factory() as uow:
            sessions = await uow.sessions.get_by_user_id(user_id)
        return [session for session in sessions if session.is_valid()]

    async def cleanup_expired_sessions(self) -> int:
        async with self._uow_factory() as uow:
            removed = await uow.sessions.delete_expired()

        if removed:
            logger.info(f"Removed {removed} expired sessions")
        return removed
