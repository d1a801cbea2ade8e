# 📄 File: app/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for saving and finding user accounts without saying which database is used.
# 🧪 Purpose (Technical Summary):
# Repository interface for User aggregates following the Repository pattern and dependency inversion.
# 🔗 Dependencies:
# Domain models (User), typing, abc
# 🔄 Connected Modules / Calls From:
# UserApplicationService, AuthenticationService, EnrollmentApplicationService,
# ReviewApplicationService, SqlAlchemyUnitOfWork

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (User), not database models
    - Writes join the surrounding unit of work and are committed by it
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Persist a new user.

        Raises:
            ConflictError: If a user with the same email already exists
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, None when absent."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email address, None when absent."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist changes of an existing user."""
        pass
