"""
Enrollment read queries.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.modules.enrollment.domain.models.enrollment import EnrollmentStatus


class EnrollmentQuery(BaseModel):
    """Filters for listing a user's enrollments."""
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    course_id: Optional[UUID] = None
    status: Optional[EnrollmentStatus] = None
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class EnrollmentProgressQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    enrollment_id: UUID
    user_id: UUID
