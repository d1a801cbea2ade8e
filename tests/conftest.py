"""Pytest configuration and shared fixtures.

Environment variables are set before any application import: settings are
cached on first access and the rate limiter reads them at import time.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-for-testing-only")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("EMAIL_OUTBOX_RELAY_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from decimal import Decimal
from typing import Callable, Optional

import pytest

from app.modules.course_management.domain.models.category import Category
from app.modules.course_management.domain.models.course import Course, CourseStatus
from app.modules.course_management.domain.models.lesson import Lesson
from app.modules.enrollment.application.services.enrollment_application_service import EnrollmentApplicationService
from app.modules.payment.infrastructure.gateway.midtrans_service import MidtransPaymentService
from app.modules.user_management.domain.models.user import User, UserRole
from app.shared.config.settings import get_settings
from app.shared.core.event_bus import EventDispatcher
from app.shared.core.security import SecurityManager
from app.shared.domain.money import Money
from app.shared.infrastructure.cache import InMemoryCacheService

from tests.fakes import MIDTRANS_SERVER_KEY, FakeDatabase, FakeSnapClient, FakeUnitOfWork, RecordingEventHandler


# =============================================================================
# Infrastructure Fixtures
# =============================================================================


@pytest.fixture
def settings():
    return get_settings().model_copy(update={"MIDTRANS_SERVER_KEY": MIDTRANS_SERVER_KEY})


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def uow_factory(database: FakeDatabase) -> Callable[[], FakeUnitOfWork]:
    return lambda: FakeUnitOfWork(database)


@pytest.fixture
def recorder() -> RecordingEventHandler:
    return RecordingEventHandler()


@pytest.fixture
def dispatcher(recorder: RecordingEventHandler) -> EventDispatcher:
    return EventDispatcher([recorder])


@pytest.fixture
def cache() -> InMemoryCacheService:
    return InMemoryCacheService(default_ttl=60)


@pytest.fixture(scope="session")
def security() -> SecurityManager:
    return SecurityManager()


@pytest.fixture
def snap_client() -> FakeSnapClient:
    return FakeSnapClient()


@pytest.fixture
def payment_gateway(settings, snap_client: FakeSnapClient) -> MidtransPaymentService:
    return MidtransPaymentService(settings, client=snap_client)


@pytest.fixture
def enrollment_service(uow_factory, payment_gateway, dispatcher) -> EnrollmentApplicationService:
    return EnrollmentApplicationService(uow_factory, payment_gateway, dispatcher)


# =============================================================================
# Seed Data
# =============================================================================


@pytest.fixture
def make_user(database: FakeDatabase) -> Callable[..., User]:
    """Seed a committed user. The password hash is a placeholder unless given."""

    def _make_user(
        role: UserRole = UserRole.STUDENT,
        email: Optional[str] = None,
        is_active: bool = True,
        password_hash: str = "not-a-real-hash",
    ) -> User:
        user = User(
            email=email or f"{role.value.lower()}{len(database.tables['users']) + 1}@learnhub.io",
            password_hash=password_hash,
            first_name="Ana",
            last_name="Silva",
            role=role,
            is_active=is_active,
        )
        return database.add("users", user)

    return _make_user


@pytest.fixture
def category(database: FakeDatabase) -> Category:
    return database.add("categories", Category(name="Web Development", slug="web-development"))


@pytest.fixture
def make_course(database: FakeDatabase, category: Category) -> Callable[..., Course]:
    """Seed a committed course with ``lessons`` lessons of ten minutes each."""

    def _make_course(
        instructor: User,
        price: str = "0",
        status: CourseStatus = CourseStatus.PUBLISHED,
        lessons: int = 3,
        title: str = "Python for Beginners",
    ) -> Course:
        course = Course.create(
            instructor_id=instructor.id,
            category_id=category.id,
            title=title,
            price=Money.create(Decimal(price)),
            duration_hours=2.5,
            description="Learn Python from scratch",
        )
        course.status = status
        database.add("courses", course)
        for number in range(1, lessons + 1):
            database.add("lessons", Lesson(
                course_id=course.id,
                title=f"Lesson {number}",
                order_number=number,
                duration_minutes=10,
            ))
        return course

    return _make_course


@pytest.fixture
def instructor(make_user) -> User:
    return make_user(UserRole.INSTRUCTOR)


@pytest.fixture
def student(make_user) -> User:
    return make_user(UserRole.STUDENT)
