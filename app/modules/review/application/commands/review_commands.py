"""Write-side commands for course reviews."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateReviewCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: UUID
    course_id: UUID
    rating: int = Field(..., description="Whole stars, 1 to 5")
    comment: Optional[str] = Field(None, max_length=2000)


class UpdateReviewCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    review_id: UUID
    user_id: UUID = Field(..., description="Acting user; must be the author")
    rating: Optional[int] = None
    comment: Optional[str] = Field(None, max_length=2000)


class DeleteReviewCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    review_id: UUID
    user_id: UUID
    is_admin: bool = False
