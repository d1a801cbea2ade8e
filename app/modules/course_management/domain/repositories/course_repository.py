# 📄 File: app/modules/course_management/domain/repositories/course_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how courses are saved, found and searched, without tying the catalog to one database.
# 🧪 Purpose (Technical Summary):
# Repository interface for Course aggregates, including filtered/paginated search and the
# ordered lesson list used by enrollment to fan out progress rows.
# 🔗 Dependencies:
# Domain models (Course, Lesson), typing, abc
# 🔄 Connected Modules / Calls From:
# CourseApplicationService, EnrollmentApplicationService, ReviewApplicationService

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple
from uuid import UUID

from ..models.course import Course, CourseLevel, CourseStatus
from ..models.lesson import Lesson


@dataclass
class CourseSearchCriteria:
    """Filters accepted by CourseRepository.search."""
    search: Optional[str] = None
    category_id: Optional[UUID] = None
    instructor_id: Optional[UUID] = None
    level: Optional[CourseLevel] = None
    status: Optional[CourseStatus] = None
    limit: int = 20
    offset: int = 0


class CourseRepository(ABC):
    """Repository interface for Course persistence."""

    @abstractmethod
    async def create(self, course: Course) -> Course:
        pass

    @abstractmethod
    async def get_by_id(self, course_id: UUID) -> Optional[Course]:
        pass

    @abstractmethod
    async def update(self, course: Course) -> Course:
        pass

    @abstractmethod
    async def search(self, criteria: CourseSearchCriteria) -> Tuple[List[Course], int]:
        """Return one page of matching courses and the total match count."""
        pass

    @abstractmethod
    async def get_by_instructor(self, instructor_id: UUID) -> List[Course]:
        pass

    @abstractmethod
    async def get_course_lessons(self, course_id: UUID) -> List[Lesson]:
        """Lessons of a course ordered by order_number."""
        pass
