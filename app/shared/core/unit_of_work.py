# 📄 File: app/shared/core/unit_of_work.py
# 🧭 Purpose (Layman Explanation):
# Groups several saves into one all-or-nothing step: an enrollment, its lesson progress,
# its payment and its confirmation email are either all stored or none of them are.
# 🧪 Purpose (Technical Summary):
# AbstractUnitOfWork contract exposing every repository bound to one transaction.
# `async with uow:` commits on clean exit and rolls back when the block raises.
# 🔗 Dependencies:
# abc, typing, module repository interfaces (type-only)
# 🔄 Connected Modules / Calls From:
# All application services, SqlAlchemyUnitOfWork, EmailOutboxRelay, test fakes

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from app.modules.course_management.domain.repositories import (
        CategoryRepository,
        CourseRepository,
        LessonRepository,
    )
    from app.modules.enrollment.domain.repositories import EnrollmentRepository, LessonProgressRepository
    from app.modules.notifications.domain.repositories import EmailOutboxRepository
    from app.modules.payment.domain.repositories import PaymentRepository
    from app.modules.review.domain.repositories import ReviewRepository
    from app.modules.user_management.domain.repositories import SessionRepository, UserRepository

logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """
    One transactional scope over all repositories.

    Repositories are available only inside ``async with``. Nested use of the
    same instance is not supported; create a new unit of work per operation.
    """

    users: "UserRepository"
    sessions: "SessionRepository"
    categories: "CategoryRepository"
    courses: "CourseRepository"
    lessons: "LessonRepository"
    enrollments: "EnrollmentRepository"
    lesson_progress: "LessonProgressRepository"
    payments: "PaymentRepository"
    reviews: "ReviewRepository"
    email_outbox: "EmailOutboxRepository"

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            logger.debug(f"Rolling back unit of work after {exc_type.__name__}")
            await self.rollback()
        else:
            await self.commit()

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass


UnitOfWorkFactory = Callable[[], AbstractUnitOfWork]
