"""
SQLAlchemy implementation of the category repository.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.course_management.domain.models.category import Category
from app.modules.course_management.domain.repositories.category_repository import CategoryRepository
from app.modules.course_management.infrastructure.database.models import CategoryModel
from app.shared.core.exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)


class CategoryRepositoryImpl(CategoryRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, category: Category) -> Category:
        try:
            self._session.add(CategoryModel(
                id=category.id,
                name=category.name,
                slug=category.slug,
                description=category.description,
                created_at=category.created_at,
                updated_at=category.updated_at,
            ))
            await self._session.flush()
            return category
        except IntegrityError as e:
            raise ConflictError("Category slug already exists", resource_type="category", conflicting_field="slug") from e
        except SQLAlchemyError as e:
            logger.error(f"Database error creating category: {str(e)}")
            raise RepositoryError(f"Failed to create category: {str(e)}", "category", "create") from e

    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        try:
            model = await self._session.get(CategoryModel, category_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to retrieve category: {str(e)}", "category", "get_by_id") from e

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        try:
            result = await self._session.execute(select(CategoryModel).where(CategoryModel.slug == slug))
            model = result.scalar_one_or_none()
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to retrieve category: {str(e)}", "category", "get_by_slug") from e

    async def list_all(self) -> List[Category]:
        try:
            result = await self._session.execute(select(CategoryModel).order_by(CategoryModel.name))
            return [self._model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to list categories: {str(e)}", "category", "list_all") from e

    def _model_to_domain(self, model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            name=model.name,
            slug=model.slug,
            description=model.description,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
