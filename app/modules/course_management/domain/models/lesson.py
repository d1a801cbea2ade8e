# 📄 File: app/modules/course_management/domain/models/lesson.py
# 🧭 Purpose (Layman Explanation):
# One lesson inside a course: its position in the course, its video and how long it takes.
# 🧪 Purpose (Technical Summary):
# Lesson entity with positive ordering/duration invariants and preview toggling.
# 🔗 Dependencies:
# pydantic, uuid, datetime, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# CourseApplicationService (add/update lesson), EnrollmentApplicationService (progress fan-out),
# LessonRepositoryImpl

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.shared.core.exceptions import ValidationError


class Lesson(BaseModel):
    """Lesson belonging to exactly one course."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    course_id: UUID
    title: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    content: Optional[str] = None
    order_number: int
    duration_minutes: int
    is_preview: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Lesson title is required", field="title")
        return v.strip()

    @field_validator("order_number")
    @classmethod
    def validate_order(cls, v: int) -> int:
        if v <= 0:
            raise ValidationError("Order number must be positive", field="order_number", value=v)
        return v

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, v: int) -> int:
        if v <= 0:
            raise ValidationError("Duration must be positive", field="duration_minutes", value=v)
        return v

    def update(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        video_url: Optional[str] = None,
        content: Optional[str] = None,
        duration_minutes: Optional[int] = None,
        is_preview: Optional[bool] = None,
    ) -> None:
        if title is not None and title.strip():
            self.title = title
        if description is not None:
            self.description = description.strip() or None
        if video_url is not None:
            self.video_url = video_url
        if content is not None:
            self.content = content
        if duration_minutes is not None and duration_minutes > 0:
            self.duration_minutes = duration_minutes
        if is_preview is not None:
            self.is_preview = is_preview
        self.updated_at = datetime.now(timezone.utc)

    def reorder(self, new_order_number: int) -> None:
        self.order_number = new_order_number
        self.updated_at = datetime.now(timezone.utc)

    def make_preview(self) -> None:
        self.is_preview = True
        self.updated_at = datetime.now(timezone.utc)

    def remove_preview(self) -> None:
        self.is_preview = False
        self.updated_at = datetime.now(timezone.utc)
