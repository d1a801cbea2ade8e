# 📄 File: app/modules/course_management/application/commands/course_commands.py
# 🧭 Purpose (Layman Explanation):
# The catalog "requests" instructors and admins make: create or edit a course, publish or
# archive it, add and edit lessons, and create categories.
#
# 🧪 Purpose (Technical Summary):
# Frozen pydantic command objects for course, lesson and category writes. The acting
# instructor id travels with each command so ownership is checked in the service.
#
# 🔗 Dependencies:
# - pydantic, course domain enums
#
# 🔄 Connected Modules / Calls From:
# - CourseApplicationService, course/category routes

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.course_management.domain.models.course import CourseLevel


class CreateCourseCommand(BaseModel):
    """Create a DRAFT course owned by the acting instructor."""
    model_config = ConfigDict(frozen=True)

    instructor_id: UUID
    category_id: UUID
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), description="Course price; 0 means free")
    duration_hours: float = Field(..., description="Estimated total duration in hours")
    level: CourseLevel = CourseLevel.BEGINNER
    thumbnail_url: Optional[str] = None


class UpdateCourseCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_id: UUID
    instructor_id: UUID
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration_hours: Optional[float] = None


class PublishCourseCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_id: UUID
    instructor_id: UUID


class AddLessonCommand(BaseModel):
    """Append a lesson to a course owned by the acting instructor."""
    model_config = ConfigDict(frozen=True)

    course_id: UUID
    instructor_id: UUID
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = None
    content: Optional[str] = None
    order_number: int = Field(..., description="1-based position inside the course")
    duration_minutes: int
    is_preview: bool = False


class UpdateLessonCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    lesson_id: UUID
    instructor_id: UUID
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = None
    content: Optional[str] = None
    order_number: Optional[int] = None
    duration_minutes: Optional[int] = None
    is_preview: Optional[bool] = None


class CreateCategoryCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., max_length=100)
    slug: str = Field(..., max_length=100, description="lowercase-words-with-dashes")
    description: Optional[str] = None
