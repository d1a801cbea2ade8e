"""Read-side query objects for the course catalog."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.course_management.domain.models.course import CourseLevel, CourseStatus


class CourseQuery(BaseModel):
    """Catalog search filters with offset pagination."""
    model_config = ConfigDict(frozen=True)

    search: Optional[str] = Field(None, description="Case-insensitive match on title or description")
    category_id: Optional[UUID] = None
    level: Optional[CourseLevel] = None
    status: Optional[CourseStatus] = None
    instructor_id: Optional[UUID] = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
