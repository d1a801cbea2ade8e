"""
In-memory stand-ins for the persistence and external-service ports.

Repositories subclass the real repository interfaces, so a missing or
renamed method fails at construction time. FakeUnitOfWork stages every
write on a deep copy of the committed tables: a rolled back unit of work
leaves the database exactly as it was. Like a real session, repositories
store and hand out copies, so an entity changed without update() is not saved.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from app.modules.course_management.domain.models.category import Category
from app.modules.course_management.domain.models.course import Course
from app.modules.course_management.domain.models.lesson import Lesson
from app.modules.course_management.domain.repositories.category_repository import CategoryRepository
from app.modules.course_management.domain.repositories.course_repository import (
    CourseRepository,
    CourseSearchCriteria,
)
from app.modules.course_management.domain.repositories.lesson_repository import LessonRepository
from app.modules.enrollment.domain.models.enrollment import Enrollment, EnrollmentStatus
from app.modules.enrollment.domain.models.lesson_progress import LessonProgress
from app.modules.enrollment.domain.repositories.enrollment_repository import EnrollmentRepository
from app.modules.enrollment.domain.repositories.lesson_progress_repository import LessonProgressRepository
from app.modules.notifications.domain.models.outbox_email import OutboxEmail, OutboxStatus
from app.modules.notifications.domain.repositories.email_outbox_repository import EmailOutboxRepository
from app.modules.notifications.domain.services.email_sender import EmailSender
from app.modules.payment.domain.models.payment import Payment
from app.modules.payment.domain.repositories.payment_repository import PaymentRepository
from app.modules.review.domain.models.review import Review
from app.modules.review.domain.repositories.review_repository import ReviewRepository
from app.modules.user_management.domain.models.session import Session
from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.repositories.session_repository import SessionRepository
from app.modules.user_management.domain.repositories.user_repository import UserRepository
from app.modules.youtube.domain.models.youtube_video import YoutubeVideo
from app.modules.youtube.domain.services.youtube_api_client import YoutubeApiClient
from app.shared.core.event_bus import WILDCARD, DomainEvent, EventHandler
from app.shared.core.exceptions import ConflictError, ExternalServiceError, NotFoundError
from app.shared.core.unit_of_work import AbstractUnitOfWork
from app.shared.domain.aggregate import AggregateRoot

TABLES = (
    "users",
    "sessions",
    "categories",
    "courses",
    "lessons",
    "enrollments",
    "lesson_progress",
    "payments",
    "reviews",
    "email_outbox",
)

Table = Dict[UUID, Any]

MIDTRANS_SERVER_KEY = "SB-Mid-server-test-key"


class FakeDatabase:
    """Committed state shared by every FakeUnitOfWork created from it."""

    def __init__(self):
        self.tables: Dict[str, Table] = {name: {} for name in TABLES}
        self.commits = 0
        self.rollbacks = 0

    def add(self, table: str, entity: Any) -> Any:
        """Seed a committed row directly."""
        self.tables[table][entity.id] = entity
        return entity

    def all(self, table: str) -> List[Any]:
        return list(self.tables[table].values())

    def snapshot(self) -> Dict[str, Table]:
        return {
            name: {key: entity.model_copy(deep=True) for key, entity in table.items()}
            for name, table in self.tables.items()
        }


# =============================================================================
# REPOSITORIES
# =============================================================================

class _InMemoryRepository:
    def __init__(self, table: Table):
        self._rows = table

    @staticmethod
    def _copy(entity):
        """Detached copy without pending domain events, as a freshly loaded row would be."""
        copied = entity.model_copy(deep=True)
        if isinstance(copied, AggregateRoot):
            copied.pull_domain_events()
        return copied

    def _store(self, entity):
        self._rows[entity.id] = self._copy(entity)
        return entity

    def _get(self, key: UUID):
        row = self._rows.get(key)
        return self._copy(row) if row is not None else None

    def _find(self, predicate):
        return next((self._copy(row) for row in self._rows.values() if predicate(row)), None)

    def _select(self, predicate=None, key=None, reverse: bool = False) -> list:
        rows = [row for row in self._rows.values() if predicate is None or predicate(row)]
        if key is not None:
            rows.sort(key=key, reverse=reverse)
        return [self._copy(row) for row in rows]

    def _require(self, entity):
        if entity.id not in self._rows:
            raise NotFoundError(resource_type=type(entity).__name__.lower(), resource_id=str(entity.id))
        return self._store(entity)


class FakeUserRepository(_InMemoryRepository, UserRepository):
    async def create(self, user: User) -> User:
        if any(existing.email == user.email for existing in self._rows.values()):
            raise ConflictError("User with this email already exists", "user", "email")
        return self._store(user)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self._get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        normalized = email.strip().lower()
        return self._find(lambda user: user.email == normalized)

    async def update(self, user: User) -> User:
        return self._require(user)


class FakeSessionRepository(_InMemoryRepository, SessionRepository):
    async def create(self, session: Session) -> Session:
        return self._store(session)

    async def get_by_jti(self, jti: str) -> Optional[Session]:
        return self._find(lambda s: s.jti == jti)

    async def get_by_user_id(self, user_id: UUID) -> List[Session]:
        return self._select(lambda s: s.user_id == user_id)

    async def update(self, session: Session) -> Session:
        return self._require(session)

    async def delete_expired(self) -> int:
        expired = [key for key, s in self._rows.items() if s.is_expired()]
        for key in expired:
            del self._rows[key]
        return len(expired)


class FakeCategoryRepository(_InMemoryRepository, CategoryRepository):
    async def create(self, category: Category) -> Category:
        return self._store(category)

    async def get_by_id(self, category_id: UUID) -> Optional[Category]:
        return self._get(category_id)

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        return self._find(lambda c: c.slug == slug)

    async def list_all(self) -> List[Category]:
        return self._select(key=lambda c: c.name)


class FakeCourseRepository(_InMemoryRepository, CourseRepository):
    def __init__(self, table: Table, lessons: Table):
        super().__init__(table)
        self._lessons = FakeLessonRepository(lessons)

    async def create(self, course: Course) -> Course:
        return self._store(course)

    async def get_by_id(self, course_id: UUID) -> Optional[Course]:
        return self._get(course_id)

    async def update(self, course: Course) -> Course:
        return self._require(course)

    async def search(self, criteria: CourseSearchCriteria) -> Tuple[List[Course], int]:
        def matches(course: Course) -> bool:
            if criteria.search:
                needle = criteria.search.strip().lower()
                haystack = f"{course.title} {course.description or ''}".lower()
                if needle not in haystack:
                    return False
            if criteria.category_id and course.category_id != criteria.category_id:
                return False
            if criteria.instructor_id and course.instructor_id != criteria.instructor_id:
                return False
            if criteria.level and course.level != criteria.level:
                return False
            if criteria.status and course.status != criteria.status:
                return False
            return True

        found = self._select(matches, key=lambda c: c.created_at, reverse=True)
        return found[criteria.offset:criteria.offset + criteria.limit], len(found)

    async def get_by_instructor(self, instructor_id: UUID) -> List[Course]:
        return self._select(lambda c: c.instructor_id == instructor_id)

    async def get_course_lessons(self, course_id: UUID) -> List[Lesson]:
        return await self._lessons.get_by_course_id(course_id)


class FakeLessonRepository(_InMemoryRepository, LessonRepository):
    async def create(self, lesson: Lesson) -> Lesson:
        return self._store(lesson)

    async def get_by_id(self, lesson_id: UUID) -> Optional[Lesson]:
        return self._get(lesson_id)

    async def get_by_course_id(self, course_id: UUID) -> List[Lesson]:
        return self._select(lambda lesson: lesson.course_id == course_id, key=lambda lesson: lesson.order_number)

    async def update(self, lesson: Lesson) -> Lesson:
        return self._require(lesson)

    async def count_by_course(self, course_id: UUID) -> int:
        return sum(1 for lesson in self._rows.values() if lesson.course_id == course_id)


class FakeEnrollmentRepository(_InMemoryRepository, EnrollmentRepository):
    async def create(self, enrollment: Enrollment) -> Enrollment:
        if await self.get_by_user_and_course(enrollment.user_id, enrollment.course_id) is not None:
            raise ConflictError("User already enrolled in this course", "enrollment")
        return self._store(enrollment)

    async def get_by_id(self, enrollment_id: UUID) -> Optional[Enrollment]:
        return self._get(enrollment_id)

    async def get_by_user_id(
        self,
        user_id: UUID,
        status: Optional[EnrollmentStatus] = None,
        course_id: Optional[UUID] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Enrollment]:
        found = self._select(
            lambda e: e.user_id == user_id
            and (status is None or e.status == status)
            and (course_id is None or e.course_id == course_id),
            key=lambda e: e.enrolled_at,
            reverse=True,
        )
        return found[offset:offset + limit]

    async def get_by_user_and_course(self, user_id: UUID, course_id: UUID) -> Optional[Enrollment]:
        return self._find(lambda e: e.user_id == user_id and e.course_id == course_id)

    async def update(self, enrollment: Enrollment) -> Enrollment:
        return self._require(enrollment)

    async def delete(self, enrollment_id: UUID) -> bool:
        return self._rows.pop(enrollment_id, None) is not None


class FakeLessonProgressRepository(_InMemoryRepository, LessonProgressRepository):
    async def create(self, progress: LessonProgress) -> LessonProgress:
        return self._store(progress)

    async def create_many(self, progresses: List[LessonProgress]) -> List[LessonProgress]:
        return [self._store(progress) for progress in progresses]

    async def get_by_enrollment_id(self, enrollment_id: UUID) -> List[LessonProgress]:
        return self._select(lambda p: p.enrollment_id == enrollment_id)

    async def get_by_enrollment_and_lesson(self, enrollment_id: UUID, lesson_id: UUID) -> Optional[LessonProgress]:
        return self._find(lambda p: p.enrollment_id == enrollment_id and p.lesson_id == lesson_id)

    async def update(self, progress: LessonProgress) -> LessonProgress:
        return self._require(progress)


class FakePaymentRepository(_InMemoryRepository, PaymentRepository):
    async def create(self, payment: Payment) -> Payment:
        return self._store(payment)

    async def get_by_id(self, payment_id: UUID) -> Optional[Payment]:
        return self._get(payment_id)

    async def get_by_order_id(self, order_id: str) -> Optional[Payment]:
        return self._find(lambda p: p.order_id == order_id)

    async def get_by_enrollment_id(self, enrollment_id: UUID) -> List[Payment]:
        return self._select(lambda p: p.enrollment_id == enrollment_id)

    async def update(self, payment: Payment) -> Payment:
        return self._require(payment)


class FakeReviewRepository(_InMemoryRepository, ReviewRepository):
    async def create(self, review: Review) -> Review:
        return self._store(review)

    async def get_by_id(self, review_id: UUID) -> Optional[Review]:
        return self._get(review_id)

    async def get_by_user_and_course(self, user_id: UUID, course_id: UUID) -> Optional[Review]:
        return self._find(lambda r: r.user_id == user_id and r.course_id == course_id)

    async def get_by_course_id(self, course_id: UUID, limit: int = 20, offset: int = 0) -> List[Review]:
        found = self._select(lambda r: r.course_id == course_id, key=lambda r: r.created_at, reverse=True)
        return found[offset:offset + limit]

    async def get_rating_stats(self, course_id: UUID) -> Tuple[float, int]:
        ratings = [r.rating for r in self._rows.values() if r.course_id == course_id]
        if not ratings:
            return 0.0, 0
        return round(sum(ratings) / len(ratings), 2), len(ratings)

    async def update(self, review: Review) -> Review:
        return self._require(review)

    async def delete(self, review_id: UUID) -> bool:
        return self._rows.pop(review_id, None) is not None


class FakeEmailOutboxRepository(_InMemoryRepository, EmailOutboxRepository):
    async def add(self, email: OutboxEmail) -> OutboxEmail:
        return self._store(email)

    async def get_by_id(self, email_id: UUID) -> Optional[OutboxEmail]:
        return self._get(email_id)

    async def claim_pending(self, limit: int, lease: timedelta) -> List[OutboxEmail]:
        deliverable = self._select(
            lambda e: e.status == OutboxStatus.PENDING or e.is_claim_expired(lease),
            key=lambda e: e.created_at,
        )[:limit]
        for email in deliverable:
            email.claim()
            self._store(email)
        return deliverable

    async def update(self, email: OutboxEmail) -> OutboxEmail:
        return self._require(email)


# =============================================================================
# UNIT OF WORK
# =============================================================================

class FakeUnitOfWork(AbstractUnitOfWork):
    def __init__(self, database: FakeDatabase):
        self._database = database
        self._staged: Optional[Dict[str, Table]] = None

    async def __aenter__(self) -> "FakeUnitOfWork":
        staged = self._database.snapshot()
        self._staged = staged
        self.users = FakeUserRepository(staged["users"])
        self.sessions = FakeSessionRepository(staged["sessions"])
        self.categories = FakeCategoryRepository(staged["categories"])
        self.courses = FakeCourseRepository(staged["courses"], staged["lessons"])
        self.lessons = FakeLessonRepository(staged["lessons"])
        self.enrollments = FakeEnrollmentRepository(staged["enrollments"])
        self.lesson_progress = FakeLessonProgressRepository(staged["lesson_progress"])
        self.payments = FakePaymentRepository(staged["payments"])
        self.reviews = FakeReviewRepository(staged["reviews"])
        self.email_outbox = FakeEmailOutboxRepository(staged["email_outbox"])
        return self

    async def commit(self) -> None:
        self._database.tables = self._staged
        self._database.commits += 1
        self._staged = None

    async def rollback(self) -> None:
        self._database.rollbacks += 1
        self._staged = None


# =============================================================================
# EXTERNAL SERVICES
# =============================================================================

class RecordingEventHandler(EventHandler):
    """Collects every dispatched domain event."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    @property
    def event_type(self) -> str:
        return WILDCARD

    async def handle(self, event: DomainEvent) -> None:
        self.events.append(event)

    def types(self) -> List[str]:
        return [event.event_type for event in self.events]


class FakeSnapClient:
    """Replaces the APIClient the Midtrans gateway posts Snap requests through."""

    def __init__(self, token: str = "snap-token-123", fail: bool = False):
        self.token = token
        self.fail = fail
        self.requests: List[Dict[str, Any]] = []
        self.closed = False

    async def post(self, endpoint: str, data: Optional[Dict] = None, headers: Optional[Dict] = None) -> Dict[str, Any]:
        self.requests.append({"endpoint": endpoint, "data": data})
        if self.fail:
            raise ExternalServiceError("Gateway unavailable", service_name="midtrans", upstream_status=503)
        return {"token": self.token, "redirect_url": f"https://pay.example/{self.token}"}

    async def close(self) -> None:
        self.closed = True


class FakeEmailSender(EmailSender):
    def __init__(self, failures: int = 0):
        self.sent: List[OutboxEmail] = []
        self._failures = failures

    async def send(self, email: OutboxEmail) -> None:
        # Suspend like a network round trip so concurrent relays interleave
        await asyncio.sleep(0)
        if self._failures > 0:
            self._failures -= 1
            raise ConnectionError("SMTP server unreachable")
        self.sent.append(email)


class FakeYoutubeClient(YoutubeApiClient):
    def __init__(self, videos: Optional[List[YoutubeVideo]] = None, playlists: Optional[Dict[str, List[str]]] = None):
        self.videos = {video.id: video for video in videos or []}
        self.playlists = playlists or {}
        self.calls: List[Tuple[str, Any]] = []

    async def get_video_details(self, video_id: str) -> YoutubeVideo:
        self.calls.append(("video", video_id))
        if video_id not in self.videos:
            raise NotFoundError("Video not found or is private", resource_type="youtube_video", resource_id=video_id)
        return self.videos[video_id]

    async def get_multiple_videos(self, video_ids: List[str]) -> List[YoutubeVideo]:
        self.calls.append(("videos", tuple(video_ids)))
        return [self.videos[video_id] for video_id in video_ids if video_id in self.videos]

    async def get_playlist_video_ids(self, playlist_id: str, max_results: int = 50) -> List[str]:
        self.calls.append(("playlist", playlist_id))
        return self.playlists.get(playlist_id, [])[:max_results]


def make_video(video_id: str, duration_seconds: int = 300, title: Optional[str] = None) -> YoutubeVideo:
    return YoutubeVideo(
        id=video_id,
        title=title or f"Video {video_id}",
        channel_title="LearnHub Channel",
        published_at=datetime(2024, 1, 15, tzinfo=timezone.utc),
        duration_seconds=duration_seconds,
    )


def course_lessons(database: FakeDatabase, course: Course) -> List[Lesson]:
    lessons = [lesson for lesson in database.all("lessons") if lesson.course_id == course.id]
    return sorted(lessons, key=lambda lesson: lesson.order_number)
