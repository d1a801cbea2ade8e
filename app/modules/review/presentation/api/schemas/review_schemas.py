"""Request/response schemas for course reviews."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.modules.review.application.dto.review_dto import CourseReviewsDTO
from app.modules.review.domain.models.review import Review


class CreateReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Whole stars, 1 to 5")
    comment: Optional[str] = Field(None, max_length=2000)


class UpdateReviewRequest(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewResponse(BaseModel):
    id: UUID
    user_id: UUID
    course_id: UUID
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, review: Review) -> "ReviewResponse":
        return cls(**review.model_dump())


class CourseReviewsResponse(BaseModel):
    reviews: List[ReviewResponse]
    average_rating: float
    total_reviews: int

    @classmethod
    def from_dto(cls, dto: CourseReviewsDTO) -> "CourseReviewsResponse":
        return cls(
            reviews=[ReviewResponse.from_domain(r) for r in dto.reviews],
            average_rating=dto.average_rating,
            total_reviews=dto.total_reviews,
        )
