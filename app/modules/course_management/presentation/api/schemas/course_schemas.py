# 📄 File: app/modules/course_management/presentation/api/schemas/course_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of course, lesson and category information going in and out of the catalog API.
#
# 🧪 Purpose (Technical Summary):
# Pydantic v2 request/response schemas for course, lesson and category routes, with
# from_domain converters. Prices travel as decimal strings.
#
# 🔗 Dependencies:
# - pydantic, course_management domain models and DTOs
#
# 🔄 Connected Modules / Calls From:
# - course_management presentation routes

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.modules.course_management.application.dto.course_dto import PaginatedCoursesDTO
from app.modules.course_management.domain.models.category import Category
from app.modules.course_management.domain.models.course import Course, CourseLevel, CourseStatus
from app.modules.course_management.domain.models.lesson import Lesson


# =============================================================================
# COURSE
# =============================================================================

class CreateCourseRequest(BaseModel):
    category_id: UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), ge=0, description="0 means free")
    duration_hours: float = Field(..., gt=0)
    level: CourseLevel = CourseLevel.BEGINNER
    thumbnail_url: Optional[str] = Field(None, max_length=500)


class UpdateCourseRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    duration_hours: Optional[float] = Field(None, gt=0)


class CourseResponse(BaseModel):
    id: UUID
    instructor_id: UUID
    category_id: UUID
    title: str
    description: Optional[str] = None
    price: Decimal
    is_free: bool
    thumbnail_url: Optional[str] = None
    status: CourseStatus
    duration_hours: float
    level: CourseLevel
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, course: Course) -> "CourseResponse":
        return cls(
            id=course.id,
            instructor_id=course.instructor_id,
            category_id=course.category_id,
            title=course.title,
            description=course.description,
            price=course.price.amount,
            is_free=course.is_free(),
            thumbnail_url=course.thumbnail_url,
            status=course.status,
            duration_hours=course.duration_hours,
            level=course.level,
            created_at=course.created_at,
            updated_at=course.updated_at,
        )


class CourseListResponse(BaseModel):
    items: List[CourseResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_dto(cls, dto: PaginatedCoursesDTO) -> "CourseListResponse":
        return cls(
            items=[CourseResponse.from_domain(c) for c in dto.items],
            total=dto.total,
            page=dto.page,
            limit=dto.limit,
            total_pages=dto.total_pages,
        )


# =============================================================================
# LESSON
# =============================================================================

class AddLessonRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    order_number: int = Field(..., ge=1)
    duration_minutes: int = Field(..., gt=0)
    is_preview: bool = False


class UpdateLessonRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = Field(None, max_length=500)
    content: Optional[str] = None
    order_number: Optional[int] = Field(None, ge=1)
    duration_minutes: Optional[int] = Field(None, gt=0)
    is_preview: Optional[bool] = None


class LessonResponse(BaseModel):
    id: UUID
    course_id: UUID
    title: str
    description: Optional[str] = None
    video_url: Optional[str] = None
    content: Optional[str] = None
    order_number: int
    duration_minutes: int
    is_preview: bool

    @classmethod
    def from_domain(cls, lesson: Lesson) -> "LessonResponse":
        return cls(**lesson.model_dump(exclude={"created_at", "updated_at"}))


# =============================================================================
# CATEGORY
# =============================================================================

class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, examples=["web-development"])
    description: Optional[str] = None


class CategoryResponse(BaseModel):
    id: UUID
    name: str
    slug: str
    description: Optional[str] = None

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryResponse":
        return cls(id=category.id, name=category.name, slug=category.slug, description=category.description)
