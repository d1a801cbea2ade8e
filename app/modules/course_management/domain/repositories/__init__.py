"""Course catalog repository contracts."""

from .category_repository import CategoryRepository
from .course_repository import CourseRepository, CourseSearchCriteria
from .lesson_repository import LessonRepository

__all__ = ["CategoryRepository", "CourseRepository", "CourseSearchCriteria", "LessonRepository"]
