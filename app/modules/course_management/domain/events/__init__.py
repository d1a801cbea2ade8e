"""Course catalog domain events."""

from .course_events import CourseArchived, CoursePublished, CourseUnarchived

__all__ = ["CourseArchived", "CoursePublished", "CourseUnarchived"]
