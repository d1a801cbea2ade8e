"""Review read models."""

from typing import List

from pydantic import BaseModel, ConfigDict

from app.modules.review.domain.models.review import Review


class CourseReviewsDTO(BaseModel):
    """A page of reviews plus the course-wide rating summary."""
    model_config = ConfigDict(frozen=True)

    reviews: List[Review]
    average_rating: float
    total_reviews: int
