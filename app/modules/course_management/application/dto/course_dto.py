"""Data transfer objects returned by the course catalog use cases."""

import math
from typing import List

from pydantic import BaseModel, ConfigDict

from app.modules.course_management.domain.models.course import Course


class PaginatedCoursesDTO(BaseModel):
    """One page of a course search."""
    model_config = ConfigDict(frozen=True)

    items: List[Course]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, items: List[Course], total: int, limit: int, offset: int) -> "PaginatedCoursesDTO":
        return cls(
            items=items,
            total=total,
            page=offset // limit + 1,
            limit=limit,
            total_pages=math.ceil(total / limit) if total else 0,
        )
