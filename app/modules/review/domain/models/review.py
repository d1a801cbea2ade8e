# 📄 File: app/modules/review/domain/models/review.py
# 🧭 Purpose (Layman Explanation):
# A student's 1 to 5 star rating of a course with an optional comment.
# 🧪 Purpose (Technical Summary):
# Review entity enforcing integer ratings in 1..5, comment trimming and author-only editing.
# 🔗 Dependencies:
# pydantic, uuid, datetime, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# ReviewApplicationService, ReviewRepositoryImpl

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.shared.core.exceptions import ValidationError


def _clean_comment(comment: Optional[str]) -> Optional[str]:
    if comment is None:
        return None
    return comment.strip() or None


class Review(BaseModel):
    """Course review written by one user. One review per (user, course)."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    course_id: UUID
    rating: int
    comment: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("rating", mode="before")
    @classmethod
    def validate_rating(cls, v):
        if isinstance(v, bool) or not isinstance(v, int) or not 1 <= v <= 5:
            raise ValidationError("Rating must be between 1 and 5", field="rating", value=v, constraint="1..5")
        return v

    @classmethod
    def create(cls, user_id: UUID, course_id: UUID, rating: int, comment: Optional[str] = None) -> "Review":
        return cls(user_id=user_id, course_id=course_id, rating=rating, comment=_clean_comment(comment))

    def update(self, rating: Optional[int] = None, comment: Optional[str] = None) -> None:
        if rating is not None:
            self.rating = rating
        if comment is not None:
            self.comment = _clean_comment(comment)
        self.updated_at = datetime.now(timezone.utc)

    def can_edit(self, user_id: UUID) -> bool:
        return self.user_id == user_id
