# 📄 File: app/modules/user_management/domain/repositories/session_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how login sessions are stored, looked up by token id, and cleaned up when expired.
# 🧪 Purpose (Technical Summary):
# Repository interface for Session entities.
# 🔗 Dependencies:
# Domain models (Session), typing, abc
# 🔄 Connected Modules / Calls From:
# SessionService, SqlAlchemyUnitOfWork

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..models.session import Session


class SessionRepository(ABC):
    """Repository interface for Session persistence."""

    @abstractmethod
    async def create(self, session: Session) -> Session:
        pass

    @abstractmethod
    async def get_by_jti(self, jti: str) -> Optional[Session]:
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        pass

    @abstractmethod
    async def update(self, session: Session) -> Session:
        pass

    @abstractmethod
    async def delete_expired(self) -> int:
        """Delete sessions past their expiry. Returns the number removed."""
        pass
