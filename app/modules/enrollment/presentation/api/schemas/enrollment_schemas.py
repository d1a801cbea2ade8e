# 📄 File: app/modules/enrollment/presentation/api/schemas/enrollment_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of enrollment and lesson-progress information exchanged with the learning app.
#
# 🧪 Purpose (Technical Summary):
# Pydantic v2 request/response schemas for the enrollment routes with from_domain converters.
#
# 🔗 Dependencies:
# - pydantic, enrollment domain models and DTOs
#
# 🔄 Connected Modules / Calls From:
# - app.modules.enrollment.presentation.api.v1.enrollments

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.modules.enrollment.application.dto.enrollment_dto import EnrollmentProgressDTO
from app.modules.enrollment.domain.models.enrollment import Enrollment, EnrollmentStatus
from app.modules.enrollment.domain.models.lesson_progress import LessonProgress, ProgressStatus


class EnrollRequest(BaseModel):
    course_id: UUID


class UpdateProgressRequest(BaseModel):
    watch_duration_seconds: int = Field(..., ge=0, description="Total seconds watched so far")


class EnrollmentResponse(BaseModel):
    id: UUID
    user_id: UUID
    course_id: UUID
    status: EnrollmentStatus
    amount_paid: Decimal
    progress_percentage: int
    enrolled_at: datetime
    completed_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, enrollment: Enrollment) -> "EnrollmentResponse":
        return cls(
            id=enrollment.id,
            user_id=enrollment.user_id,
            course_id=enrollment.course_id,
            status=enrollment.status,
            amount_paid=enrollment.amount_paid.amount,
            progress_percentage=enrollment.progress_percentage,
            enrolled_at=enrollment.enrolled_at,
            completed_at=enrollment.completed_at,
        )


class LessonProgressResponse(BaseModel):
    lesson_id: UUID
    status: ProgressStatus
    watch_duration_seconds: int
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, progress: LessonProgress) -> "LessonProgressResponse":
        return cls(
            lesson_id=progress.lesson_id,
            status=progress.status,
            watch_duration_seconds=progress.watch_duration_seconds,
            started_at=progress.started_at,
            completed_at=progress.completed_at,
        )


class EnrollmentProgressResponse(BaseModel):
    enrollment: EnrollmentResponse
    lessons: List[LessonProgressResponse]
    completed_lessons: int
    total_lessons: int
    progress_percentage: int

    @classmethod
    def from_dto(cls, dto: EnrollmentProgressDTO) -> "EnrollmentProgressResponse":
        return cls(
            enrollment=EnrollmentResponse.from_domain(dto.enrollment),
            lessons=[LessonProgressResponse.from_domain(p) for p in dto.lesson_progresses],
            completed_lessons=dto.completed_lessons,
            total_lessons=dto.total_lessons,
            progress_percentage=dto.progress_percentage,
        )
