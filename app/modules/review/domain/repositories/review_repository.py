# 📄 File: app/modules/review/domain/repositories/review_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how reviews are saved, listed per course and summarised into an average rating.
# 🧪 Purpose (Technical Summary):
# Repository interface for Review entities; (user_id, course_id) is unique.
# 🔗 Dependencies:
# Domain models (Review), typing, abc
# 🔄 Connected Modules / Calls From:
# ReviewApplicationService

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from ..models.review import Review


class ReviewRepository(ABC):
    """Repository interface for Review persistence."""

    @abstractmethod
    async def create(self, review: Review) -> Review:
        pass

    @abstractmethod
    async def get_by_id(self, review_id: UUID) -> Optional[Review]:
        pass

    @abstractmethod
    async def get_by_user_and_course(self, user_id: UUID, course_id: UUID) -> Optional[Review]:
        pass

    @abstractmethod
    async def get_by_course_id(self, course_id: UUID, limit: int = 20, offset: int = 0) -> List[Review]:
        """Reviews of a course, newest first."""
        pass

    @abstractmethod
    async def get_rating_stats(self, course_id: UUID) -> Tuple[float, int]:
        """Average rating and review count of a course (0.0, 0 when unreviewed)."""
        pass

    @abstractmethod
    async def update(self, review: Review) -> Review:
        pass

    @abstractmethod
    async def delete(self, review_id: UUID) -> bool:
        pass
