# 📄 File: app/shared/infrastructure/database/unit_of_work.py
# 🧭 Purpose (Layman Explanation):
# The database side of "all or nothing": opens one database session, hands every repository
# that same session, and either saves everything at the end or throws everything away.
#
# 🧪 Purpose (Technical Summary):
# SqlAlchemyUnitOfWork: one AsyncSession (one transaction) per `async with` block, all
# repository implementations bound to it, commit on success, rollback on error, close always.
# Commit failures are reported as TransactionError.
#
# 🔗 Dependencies:
# - SQLAlchemy async session factory
# - Every module's SQLAlchemy repository implementation
#
# 🔄 Connected Modules / Calls From:
# - ContainerBuilder (default unit of work factory)
# - Application services, EmailOutboxRelay, celery tasks

import logging
from typing import Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.modules.course_management.infrastructure.database import (
    CategoryRepositoryImpl,
    CourseRepositoryImpl,
    LessonRepositoryImpl,
)
from app.modules.enrollment.infrastructure.database import (
    EnrollmentRepositoryImpl,
    LessonProgressRepositoryImpl,
)
from app.modules.notifications.infrastructure.database import EmailOutboxRepositoryImpl
from app.modules.payment.infrastructure.database import PaymentRepositoryImpl
from app.modules.review.infrastructure.database import ReviewRepositoryImpl
from app.modules.user_management.infrastructure.database import (
    SessionRepositoryImpl,
    UserRepositoryImpl,
)
from app.shared.core.exceptions import DatabaseError, TransactionError
from app.shared.core.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    Unit of work backed by a single SQLAlchemy AsyncSession.

    Usage:
        async with SqlAlchemyUnitOfWork(session_factory) as uow:
            enrollment = await uow.enrollments.create(enrollment)
            await uow.lesson_progress.create_many(progresses)
        # committed here; rolled back if the block raised
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        if self._session is not None:
            raise DatabaseError("Unit of work is already active")

        session = self._session_factory()
        self._session = session
        logger.debug("Database session created")

        self.users = UserRepositoryImpl(session)
        self.sessions = SessionRepositoryImpl(session)
        self.categories = CategoryRepositoryImpl(session)
        self.courses = CourseRepositoryImpl(session)
        self.lessons = LessonRepositoryImpl(session)
        self.enrollments = EnrollmentRepositoryImpl(session)
        self.lesson_progress = LessonProgressRepositoryImpl(session)
        self.payments = PaymentRepositoryImpl(session)
        self.reviews = ReviewRepositoryImpl(session)
        self.email_outbox = EmailOutboxRepositoryImpl(session)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            if self._session is not None:
                await self._session.close()
                logger.debug("Database session closed")
            self._session = None

    async def commit(self) -> None:
        if self._session is None:
            raise DatabaseError("Unit of work is not active")
        try:
            await self._session.commit()
            logger.debug("Database transaction committed successfully")
        except exc.SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Commit failed, transaction rolled back: {e}")
            raise TransactionError(f"Transaction failed: {e}") from e

    async def rollback(self) -> None:
        if self._session is None:
            return
        try:
            await self._session.rollback()
            logger.debug("Database transaction rolled back")
        except exc.SQLAlchemyError as e:
            logger.error(f"Rollback failed: {e}")
            raise TransactionError(f"Rollback failed: {e}") from e
