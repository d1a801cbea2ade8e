# 📄 File: app/modules/course_management/domain/models/course.py
# 🧭 Purpose (Layman Explanation):
# Defines a course in the catalog: its title, price, difficulty and whether it is still a draft,
# open for students (published) or retired (archived).
# 🧪 Purpose (Technical Summary):
# Course aggregate enforcing the DRAFT → PUBLISHED / ARCHIVED lifecycle, edit lock once
# published, enrollability and free-course checks. Raises "course.published".
# 🔗 Dependencies:
# pydantic, uuid, datetime, app.shared.domain (Money, AggregateRoot), app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# CourseApplicationService, EnrollmentDomainService, EnrollmentApplicationService,
# CourseRepositoryImpl

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from app.modules.course_management.domain.events.course_events import (
    CourseArchived,
    CoursePublished,
    CourseUnarchived,
)
from app.shared.core.exceptions import BusinessRuleViolationError, ValidationError
from app.shared.domain.aggregate import AggregateRoot
from app.shared.domain.money import Money


class CourseStatus(str, Enum):
    """Course lifecycle status"""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class CourseLevel(str, Enum):
    """Course difficulty level"""
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class Course(AggregateRoot):
    """
    Course domain model.

    Lifecycle:
    - created as DRAFT by an instructor
    - DRAFT → PUBLISHED (only from DRAFT, requires lessons at service level)
    - any non-ARCHIVED → ARCHIVED, ARCHIVED → DRAFT via unarchive
    - content edits are rejected while PUBLISHED
    """

    id: UUID = Field(default_factory=uuid4)
    instructor_id: UUID
    category_id: UUID
    title: str
    description: Optional[str] = None
    price: Money = Field(default_factory=Money.zero, frozen=True)
    thumbnail_url: Optional[str] = None
    status: CourseStatus = CourseStatus.DRAFT
    duration_hours: float
    level: CourseLevel = Field(default=CourseLevel.BEGINNER, frozen=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Course title is required", field="title")
        return v.strip()

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: Money) -> Money:
        # Snap gross_amount is an integer
        if not v.is_whole():
            raise ValidationError(
                "Course price must be a whole amount",
                field="price",
                value=str(v),
                constraint="no fractional part",
            )
        return v

    @field_validator("duration_hours")
    @classmethod
    def validate_duration(cls, v: float) -> float:
        if v <= 0:
            raise ValidationError("Course duration must be positive", field="duration_hours", value=v)
        return v

    @classmethod
    def create(
        cls,
        instructor_id: UUID,
        category_id: UUID,
        title: str,
        price: Money,
        duration_hours: float,
        level: CourseLevel = CourseLevel.BEGINNER,
        description: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
    ) -> "Course":
        """Create a new DRAFT course."""
        return cls(
            instructor_id=instructor_id,
            category_id=category_id,
            title=title,
            description=(description or "").strip() or None,
            price=price,
            thumbnail_url=thumbnail_url or None,
            duration_hours=duration_hours,
            level=level,
        )

    # Lifecycle

    def publish(self) -> None:
        if self.status != CourseStatus.DRAFT:
            raise BusinessRuleViolationError("Only draft courses can be published", rule="course.publish")
        self.status = CourseStatus.PUBLISHED
        self.updated_at = datetime.now(timezone.utc)
        self.record_event(CoursePublished(
            aggregate_id=str(self.id),
            payload={"title": self.title, "instructor_id": str(self.instructor_id)},
        ))

    def archive(self) -> None:
        if self.status == CourseStatus.ARCHIVED:
            raise BusinessRuleViolationError("Course is already archived", rule="course.archive")
        self.status = CourseStatus.ARCHIVED
        self.updated_at = datetime.now(timezone.utc)
        self.record_event(CourseArchived(aggregate_id=str(self.id), payload={"title": self.title}))

    def unarchive(self) -> None:
        if self.status != CourseStatus.ARCHIVED:
            raise BusinessRuleViolationError("Only archived courses can be unarchived", rule="course.unarchive")
        self.status = CourseStatus.DRAFT
        self.updated_at = datetime.now(timezone.utc)
        self.record_event(CourseUnarchived(aggregate_id=str(self.id), payload={"title": self.title}))

    def update(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        thumbnail_url: Optional[str] = None,
        duration_hours: Optional[float] = None,
    ) -> None:
        if self.is_published():
            raise BusinessRuleViolationError("Cannot update published course", rule="course.update")

        if title is not None and title.strip():
            self.title = title
        if description is not None:
            self.description = description.strip() or None
        if thumbnail_url is not None:
            self.thumbnail_url = thumbnail_url
        if duration_hours is not None and duration_hours > 0:
            self.duration_hours = duration_hours
        self.updated_at = datetime.now(timezone.utc)

    # Queries

    def is_published(self) -> bool:
        return self.status == CourseStatus.PUBLISHED

    def is_draft(self) -> bool:
        return self.status == CourseStatus.DRAFT

    def is_archived(self) -> bool:
        return self.status == CourseStatus.ARCHIVED

    def is_free(self) -> bool:
        return self.price.is_free()

    def can_enroll(self) -> bool:
        return self.is_published()

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.instructor_id == user_id
