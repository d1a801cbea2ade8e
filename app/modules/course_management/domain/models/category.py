# 📄 File: app/modules/course_management/domain/models/category.py
# 🧭 Purpose (Layman Explanation):
# A topic shelf for courses (e.g. "web-development") with a readable name and a URL-friendly slug.
# 🧪 Purpose (Technical Summary):
# Category entity with slug format validation.
# 🔗 Dependencies:
# pydantic, re, uuid, datetime
# 🔄 Connected Modules / Calls From:
# CourseApplicationService (create_course / create_category), CategoryRepositoryImpl

import re
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.shared.core.exceptions import ValidationError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class Category(BaseModel):
    """Course category."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str
    slug: str
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Category name is required", field="name")
        return v.strip()

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Category slug is required", field="slug")
        if not SLUG_PATTERN.match(v.strip()):
            raise ValidationError("Invalid slug format", field="slug", value=v)
        return v.strip()

    def update(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        if name is not None and name.strip():
            self.name = name
        if description is not None:
            self.description = description.strip() or None
        self.updated_at = datetime.now(timezone.utc)
