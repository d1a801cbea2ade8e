# 📄 File: app/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how user accounts and their login sessions are stored in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the users and sessions tables, mapped onto the shared
# DatabaseBase metadata used by alembic.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - app.shared.config.database (DatabaseBase)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py and session_repository_impl.py (CRUD operations)
# - migrations/versions/001_initial_lms_tables.py (schema)

from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    func,
)
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from app.shared.config.database import DatabaseBase


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(DatabaseBase):
    """
    SQLAlchemy model for user accounts.

    Role is stored as its enum value (STUDENT, INSTRUCTOR, ADMIN).
    Emails are stored normalized to lowercase.
    """
    __tablename__ = "users"

    id = Column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
        nullable=False,
        comment="Unique identifier for each user"
    )
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User's email address (lowercase)"
    )
    password_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed password using bcrypt"
    )
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(
        String(20),
        nullable=False,
        default="STUDENT",
        comment="STUDENT | INSTRUCTOR | ADMIN"
    )
    is_active = Column(Boolean, nullable=False, default=True)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        comment="Account creation date"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=func.now(),
        onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, role={self.role})>"


# =============================================================================
# SESSION MODEL
# =============================================================================

class SessionModel(DatabaseBase):
    """SQLAlchemy model for login sessions, one row per issued token pair."""
    __tablename__ = "sessions"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    user_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    jti = Column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        comment="JWT ID shared by the session's access and refresh tokens"
    )
    is_active = Column(Boolean, nullable=False, default=True)
    user_agent = Column(String(500), nullable=True)
    ip_address = Column(String(64), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<SessionModel(id={self.id}, user_id={self.user_id}, active={self.is_active})>"
