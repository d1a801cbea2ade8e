# 📄 File: app/modules/user_management/infrastructure/database/session_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves and looks up login sessions, and clears out the ones that have expired.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of SessionRepository (jti lookup, per-user listing,
# bulk delete of expired rows).
#
# 🔗 Dependencies:
# - SQLAlchemy async session, SessionModel, Session domain model
#
# 🔄 Connected Modules / Calls From:
# - SqlAlchemyUnitOfWork (uow.sessions)

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.models.session import Session
from app.modules.user_management.domain.repositories.session_repository import SessionRepository
from app.modules.user_management.infrastructure.database.models import SessionModel
from app.shared.core.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class SessionRepositoryImpl(SessionRepository):
    """SQLAlchemy implementation of the SessionRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, session: Session) -> Session:
        try:
            self._session.add(self._domain_to_model(session))
            await self._session.flush()
            return session
        except SQLAlchemyError as e:
            logger.error(f"Database error creating session for user {session.user_id}: {str(e)}")
            raise RepositoryError(f"Failed to create session: {str(e)}", "session", "create") from e

    async def get_by_jti(self, jti: str) -> Optional[Session]:
        try:
            result = await self._session.execute(select(SessionModel).where(SessionModel.jti == jti))
            model = result.scalar_one_or_none()
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving session {jti}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve session: {str(e)}", "session", "get_by_jti") from e

    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        try:
            stmt = (
                select(SessionModel)
                .where(SessionModel.user_id == user_id)
                .order_by(SessionModel.created_at.desc())
            )
            result = await self._session.execute(stmt)
            return [self._model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Database error listing sessions of user {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to list sessions: {str(e)}", "session", "get_by_user_id") from e

    async def update(self, session: Session) -> Session:
        try:
            model = await self._session.get(SessionModel, session.id)
            if model is None:
                raise RepositoryError(f"Session {session.id} does not exist", "session", "update")
            model.is_active = session.is_active
            model.expires_at = session.expires_at
            model.updated_at = session.updated_at
            await self._session.flush()
            return session
        except SQLAlchemyError as e:
            logger.error(f"Database error updating session {session.id}: {str(e)}")
            raise RepositoryError(f"Failed to update session: {str(e)}", "session", "update") from e

    async def delete_expired(self) -> int:
        try:
            stmt = delete(SessionModel).where(SessionModel.expires_at < datetime.now(timezone.utc))
            result = await self._session.execute(stmt)
            deleted = result.rowcount or 0
            logger.info(f"Deleted {deleted} expired sessions")
            return deleted
        except SQLAlchemyError as e:
            logger.error(f"Database error deleting expired sessions: {str(e)}")
            raise RepositoryError(f"Failed to delete expired sessions: {str(e)}", "session", "delete_expired") from e

    def _model_to_domain(self, model: SessionModel) -> Session:
        return Session(
            id=model.id,
            user_id=model.user_id,
            jti=model.jti,
            is_active=model.is_active,
            user_agent=model.user_agent,
            ip_address=model.ip_address,
            expires_at=model.expires_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _domain_to_model(self, session: Session) -> SessionModel:
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            jti=session.jti,
            is_active=session.is_active,
            user_agent=session.user_agent,
            ip_address=session.ip_address,
            expires_at=session.expires_at,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )
