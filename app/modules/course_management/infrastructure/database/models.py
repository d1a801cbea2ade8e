# 📄 File: app/modules/course_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how categories, courses and lessons are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the categories, courses and lessons tables. Prices are
# Numeric(12, 2); lesson order is unique per course.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM, app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - course/lesson/category repository implementations, alembic migration

from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from app.shared.config.database import DatabaseBase


class CategoryModel(DatabaseBase):
    """Course category."""
    __tablename__ = "categories"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), unique=True, nullable=False, index=True, comment="URL-safe identifier")
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())


class CourseModel(DatabaseBase):
    """
    Course in the catalog.

    Status follows DRAFT → PUBLISHED → ARCHIVED; level is
    BEGINNER | INTERMEDIATE | ADVANCED.
    """
    __tablename__ = "courses"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    instructor_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    category_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(12, 2), nullable=False, default=0, comment="Non-negative course price")
    thumbnail_url = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="DRAFT", index=True)
    duration_hours = Column(Float, nullable=False)
    level = Column(String(20), nullable=False, default="BEGINNER")
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())


class LessonModel(DatabaseBase):
    """Lesson of a course, ordered by order_number."""
    __tablename__ = "lessons"
    __table_args__ = (
        UniqueConstraint("course_id", "order_number", name="uq_lessons_course_order"),
    )

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    course_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    video_url = Column(String(500), nullable=True)
    content = Column(Text, nullable=True)
    order_number = Column(Integer, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    is_preview = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())
