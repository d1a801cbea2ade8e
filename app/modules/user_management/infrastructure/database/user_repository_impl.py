# 📄 File: app/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Handles the database work for user accounts: creating new users, finding them by id or
# email, and saving changes to their information.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of UserRepository bound to the unit of work's AsyncSession,
# mapping UserModel rows to User aggregates and wrapping ORM failures in RepositoryError.
#
# 🔗 Dependencies:
# - app.modules.user_management.domain (User, UserRepository)
# - app.modules.user_management.infrastructure.database.models (UserModel)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - SqlAlchemyUnitOfWork (uow.users)

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.user_management.domain.models.user import User, UserRole
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.modules.user_management.infrastructure.database.models import UserModel
from app.shared.core.exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.

    Writes are flushed, never committed; the unit of work owns the transaction.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, user: User) -> User:
        try:
            user_model = self._domain_to_model(user)
            self._session.add(user_model)
            await self._session.flush()

            logger.info(f"Created user with ID: {user_model.id}")
            return user

        except IntegrityError as e:
            logger.warning(f"User creation failed - email already exists: {user.email}")
            raise ConflictError(
                "Email already registered",
                resource_type="user",
                conflicting_field="email",
            ) from e

        except SQLAlchemyError as e:
            logger.error(f"Database error during user creation: {str(e)}")
            raise RepositoryError(f"Failed to create user: {str(e)}", "user", "create") from e

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        try:
            stmt = select(UserModel).where(UserModel.id == user_id)
            result = await self._session.execute(stmt)
            user_model = result.scalar_one_or_none()

            if user_model:
                return self._model_to_domain(user_model)

            logger.debug(f"User not found: {user_id}")
            return None

        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve user: {str(e)}", "user", "get_by_id") from e

    async def get_by_email(self, email: str) -> Optional[User]:
        try:
            stmt = select(UserModel).where(UserModel.email == email.strip().lower())
            result = await self._session.execute(stmt)
            user_model = result.scalar_one_or_none()
            return self._model_to_domain(user_model) if user_model else None

        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user by email {email}: {str(e)}")
            raise RepositoryError(f"Failed to retrieve user by email: {str(e)}", "user", "get_by_email") from e

    async def update(self, user: User) -> User:
        try:
            user_model = await self._session.get(UserModel, user.id)
            if user_model is None:
                raise RepositoryError(f"User {user.id} does not exist", "user", "update")

            user_model.email = user.email
            user_model.password_hash = user.password_hash
            user_model.first_name = user.first_name
            user_model.last_name = user.last_name
            user_model.is_active = user.is_active
            user_model.avatar_url = user.avatar_url
            user_model.updated_at = user.updated_at
            await self._session.flush()

            logger.debug(f"Updated user: {user.id}")
            return user

        except SQLAlchemyError as e:
            logger.error(f"Database error updating user {user.id}: {str(e)}")
            raise RepositoryError(f"Failed to update user: {str(e)}", "user", "update") from e

    # =========================================================================
    # MAPPING
    # =========================================================================

    def _model_to_domain(self, model: UserModel) -> User:
        return User(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            role=UserRole(model.role),
            is_active=model.is_active,
            avatar_url=model.avatar_url,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role.value,
            is_active=user.is_active,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
