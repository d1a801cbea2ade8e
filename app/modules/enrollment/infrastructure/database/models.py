# 📄 File: app/modules/enrollment/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how enrollments and per-lesson progress are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the enrollments and lesson_progress tables. The unique
# constraints back the one-enrollment-per-(user, course) and one-row-per-(enrollment, lesson)
# invariants at the storage level.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM, app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - enrollment_repository_impl.py, lesson_progress_repository_impl.py, alembic migration

from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from app.shared.config.database import DatabaseBase


class EnrollmentModel(DatabaseBase):
    """Enrollment of a user in a course."""
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_enrollments_user_course"),
        CheckConstraint("progress_percentage BETWEEN 0 AND 100", name="progress_range"),
    )

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    user_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    course_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    amount_paid = Column(Numeric(12, 2), nullable=False, default=0, comment="Price charged at enrollment")
    status = Column(String(20), nullable=False, default="ACTIVE", comment="ACTIVE | COMPLETED | CANCELLED")
    enrolled_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)
    progress_percentage = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())


class LessonProgressModel(DatabaseBase):
    """Progress of one enrollment through one lesson."""
    __tablename__ = "lesson_progress"
    __table_args__ = (
        UniqueConstraint("enrollment_id", "lesson_id", name="uq_lesson_progress_enrollment_lesson"),
    )

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    enrollment_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("enrollments.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    lesson_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False
    )
    status = Column(String(20), nullable=False, default="NOT_STARTED")
    watch_duration_seconds = Column(Integer, nullable=False, default=0)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())
