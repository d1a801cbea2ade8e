from .course_queries import CourseQuery

__all__ = ["CourseQuery"]
