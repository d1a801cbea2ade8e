# 📄 File: app/modules/course_management/domain/repositories/lesson_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how lessons are saved and looked up.
# 🧪 Purpose (Technical Summary):
# Repository interface for Lesson entities.
# 🔗 Dependencies:
# Domain models (Lesson), typing, abc
# 🔄 Connected Modules / Calls From:
# CourseApplicationService

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..models.lesson import Lesson


class LessonRepository(ABC):
    """Repository interface for Lesson persistence."""

    @abstractmethod
    async def create(self, lesson: Lesson) -> Lesson:
        pass

    @abstractmethod
    async def get_by_id(self, lesson_id: UUID) -> Optional[Lesson]:
        pass

    @abstractmethod
    async def get_by_course_id(self, course_id: UUID) -> List[Lesson]:
        pass

    @abstractmethod
    async def update(self, lesson: Lesson) -> Lesson:
        pass

    @abstractmethod
    async def count_by_course(self, course_id: UUID) -> int:
        pass
