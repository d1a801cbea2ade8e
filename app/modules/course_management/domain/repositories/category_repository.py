# 📄 File: app/modules/course_management/domain/repositories/category_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how course categories are saved and looked up.
# 🧪 Purpose (Technical Summary):
# Repository interface for Category entities.
# 🔗 Dependencies:
# Domain models (Category), typing, abc
# 🔄 Connected Modules / Calls From:
# CourseApplicationService

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..models.category import Category


class CategoryRepository(ABC):
    """Repository interface for Category persistence."""

    @abstractmethod
    async def create(self, category: Category) -> Category:
        pass

    @abstractmethod
    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Category]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Category]:
        pass
