"""SQLAlchemy persistence for the course catalog."""

from .category_repository_impl import CategoryRepositoryImpl
from .course_repository_impl import CourseRepositoryImpl
from .lesson_repository_impl import LessonRepositoryImpl
from .models import CategoryModel, CourseModel, LessonModel

__all__ = [
    "CategoryModel",
    "CategoryRepositoryImpl",
    "CourseModel",
    "CourseRepositoryImpl",
    "LessonModel",
    "LessonRepositoryImpl",
]
