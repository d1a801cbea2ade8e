from .course_commands import (
    AddLessonCommand,
    CreateCategoryCommand,
    CreateCourseCommand,
    PublishCourseCommand,
    UpdateCourseCommand,
    UpdateLessonCommand,
)

__all__ = [
    "AddLessonCommand",
    "CreateCategoryCommand",
    "CreateCourseCommand",
    "PublishCourseCommand",
    "UpdateCourseCommand",
    "UpdateLessonCommand",
]
