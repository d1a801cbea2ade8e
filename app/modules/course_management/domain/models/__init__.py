"""Course catalog domain models."""

from .category import Category
from .course import Course, CourseLevel, CourseStatus
from .lesson import Lesson

__all__ = ["Category", "Course", "CourseLevel", "CourseStatus", "Lesson"]
