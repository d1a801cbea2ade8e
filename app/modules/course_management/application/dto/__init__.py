from .course_dto import PaginatedCoursesDTO

__all__ = ["PaginatedCoursesDTO"]
