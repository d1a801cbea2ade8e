# 📄 File: app/modules/enrollment/domain/repositories/lesson_progress_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how per-lesson progress records are stored and found.
# 🧪 Purpose (Technical Summary):
# Repository interface for LessonProgress; unique per (enrollment_id, lesson_id).
# 🔗 Dependencies:
# Domain models (LessonProgress), typing, abc
# 🔄 Connected Modules / Calls From:
# EnrollmentApplicationService

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..models.lesson_progress import LessonProgress


class LessonProgressRepository(ABC):
    """Repository interface for LessonProgress persistence."""

    @abstractmethod
    async def create(self, progress: LessonProgress) -> LessonProgress:
        pass

    @abstractmethod
    async def create_many(self, progresses: List[LessonProgress]) -> List[LessonProgress]:
        """Insert progress rows in one flush."""
        pass

    @abstractmethod
    async def get_by_enrollment_id(self, enrollment_id: UUID) -> List[LessonProgress]:
        pass

    @abstractmethod
    async def get_by_enrollment_and_lesson(self, enrollment_id: UUID, lesson_id: UUID) -> Optional[LessonProgress]:
        pass

    @abstractmethod
    async def update(self, progress: LessonProgress) -> LessonProgress:
        pass
