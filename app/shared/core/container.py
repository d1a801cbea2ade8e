# 📄 File: app/shared/core/container.py
# 🧭 Purpose (Layman Explanation):
# The wiring diagram of the platform: it builds every service once at startup and hands
# each one exactly the helpers it needs (database, cache, payment gateway, mailer...).
#
# 🧪 Purpose (Technical Summary):
# Typed application container assembled by ContainerBuilder with constructor injection.
# Infrastructure defaults (SQLAlchemy unit of work, Redis cache, Midtrans, YouTube Data API,
# SMTP) can be replaced before build(), which is how tests inject fakes. The container is
# stored on app.state and resolved by FastAPI dependencies.
#
# 🔗 Dependencies:
# - All application services, infrastructure adapters, app.shared.config
#
# 🔄 Connected Modules / Calls From:
# - app.main (create_application, lifespan), app.shared.core.dependencies, celery tasks, tests

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from app.modules.course_management.application.services.course_application_service import CourseApplicationService
from app.modules.enrollment.application.services.enrollment_application_service import EnrollmentApplicationService
from app.modules.notifications.application.services.email_outbox_relay import EmailOutboxRelay
from app.modules.notifications.domain.services.email_sender import EmailSender
from app.modules.payment.application.services.payment_application_service import PaymentApplicationService
from app.modules.payment.domain.services.payment_service import PaymentService
from app.modules.review.application.services.review_application_service import ReviewApplicationService
from app.modules.user_management.application.services.authentication_service import AuthenticationService
from app.modules.user_management.application.services.session_service import SessionService
from app.modules.user_management.application.services.user_application_service import UserApplicationService
from app.modules.youtube.application.services.youtube_service import YoutubeService
from app.modules.youtube.domain.services.youtube_api_client import YoutubeApiClient
from app.shared.config.settings import Settings, get_settings
from app.shared.core.event_bus import AuditLogEventHandler, EventDispatcher, EventHandler
from app.shared.core.security import SecurityManager
from app.shared.core.unit_of_work import UnitOfWorkFactory
from app.shared.infrastructure.cache import CacheService

logger = logging.getLogger(__name__)

Closer = Callable[[], Awaitable[None]]


@dataclass
class ApplicationContainer:
    """Every long-lived service of the application, built once."""

    settings: Settings
    uow_factory: UnitOfWorkFactory
    cache: CacheService
    event_dispatcher: EventDispatcher
    security_manager: SecurityManager

    session_service: SessionService
    authentication_service: AuthenticationService
    user_service: UserApplicationService
    course_service: CourseApplicationService
    enrollment_service: EnrollmentApplicationService
    payment_gateway: PaymentService
    payment_service: PaymentApplicationService
    review_service: ReviewApplicationService
    youtube_service: YoutubeService
    email_relay: EmailOutboxRelay

    _closers: List[Closer] = field(default_factory=list, repr=False)

    async def close(self) -> None:
        """Release external resources in reverse creation order."""
        await self.email_relay.stop()
        for closer in reversed(self._closers):
            try:
                await closer()
            except Exception as e:
                logger.error(f"Error while closing container resource: {e}")
        self._closers.clear()


class ContainerBuilder:
    """
    Assembles an ApplicationContainer.

    Every with_* override is optional; anything left unset gets its production
    implementation when build() runs.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._uow_factory: Optional[UnitOfWorkFactory] = None
        self._cache: Optional[CacheService] = None
        self._payment_gateway: Optional[PaymentService] = None
        self._youtube_client: Optional[YoutubeApiClient] = None
        self._email_sender: Optional[EmailSender] = None
        self._security_manager: Optional[SecurityManager] = None
        self._event_handlers: List[EventHandler] = []
        self._closers: List[Closer] = []

    def with_uow_factory(self, uow_factory: UnitOfWorkFactory) -> "ContainerBuilder":
        self._uow_factory = uow_factory
        return self

    def with_cache(self, cache: CacheService) -> "ContainerBuilder":
        self._cache = cache
        return self

    def with_payment_gateway(self, payment_gateway: PaymentService) -> "ContainerBuilder":
        self._payment_gateway = payment_gateway
        return self

    def with_youtube_client(self, youtube_client: YoutubeApiClient) -> "ContainerBuilder":
        self._youtube_client = youtube_client
        return self

    def with_email_sender(self, email_sender: EmailSender) -> "ContainerBuilder":
        self._email_sender = email_sender
        return self

    def with_security_manager(self, security_manager: SecurityManager) -> "ContainerBuilder":
        self._security_manager = security_manager
        return self

    def with_event_handler(self, handler: EventHandler) -> "ContainerBuilder":
        self._event_handlers.append(handler)
        return self

    # =========================================================================
    # DEFAULT INFRASTRUCTURE
    # =========================================================================

    def _default_uow_factory(self) -> UnitOfWorkFactory:
        from app.shared.config.database import close_database, get_async_session_factory
        from app.shared.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork

        session_factory = get_async_session_factory()
        self._closers.append(close_database)
        return lambda: SqlAlchemyUnitOfWork(session_factory)

    def _default_cache(self) -> CacheService:
        from app.shared.config.redis import get_redis_client, redis_config
        from app.shared.infrastructure.cache import RedisCacheService

        self._closers.append(redis_config.close_connections)
        return RedisCacheService(get_redis_client(), default_ttl=self._settings.CACHE_DEFAULT_TTL)

    def _default_payment_gateway(self) -> PaymentService:
        from app.modules.payment.infrastructure.gateway.midtrans_service import MidtransPaymentService

        gateway = MidtransPaymentService(self._settings)
        self._closers.append(gateway.close)
        return gateway

    def _default_youtube_client(self) -> YoutubeApiClient:
        from app.modules.youtube.infrastructure.api.data_api_client import DataApiYoutubeClient

        client = DataApiYoutubeClient(self._settings)
        self._closers.append(client.close)
        return client

    def _default_email_sender(self) -> EmailSender:
        from app.modules.notifications.infrastructure.email.smtp_sender import SmtpEmailSender

        return SmtpEmailSender(self._settings)

    # =========================================================================
    # BUILD
    # =========================================================================

    def build(self) -> ApplicationContainer:
        settings = self._settings
        uow_factory = self._uow_factory or self._default_uow_factory()
        cache = self._cache or self._default_cache()
        payment_gateway = self._payment_gateway or self._default_payment_gateway()
        youtube_client = self._youtube_client or self._default_youtube_client()
        email_sender = self._email_sender or self._default_email_sender()
        security_manager = self._security_manager or SecurityManager()

        event_dispatcher = EventDispatcher([AuditLogEventHandler(), *self._event_handlers])
        session_service = SessionService(uow_factory, security_manager)

        container = ApplicationContainer(
            settings=settings,
            uow_factory=uow_factory,
            cache=cache,
            event_dispatcher=event_dispatcher,
            security_manager=security_manager,
            session_service=session_service,
            authentication_service=AuthenticationService(uow_factory, session_service, security_manager),
            user_service=UserApplicationService(uow_factory, security_manager, event_dispatcher),
            course_service=CourseApplicationService(uow_factory, cache, event_dispatcher, settings.CACHE_COURSE_TTL),
            enrollment_service=EnrollmentApplicationService(uow_factory, payment_gateway, event_dispatcher),
            payment_gateway=payment_gateway,
            payment_service=PaymentApplicationService(uow_factory, payment_gateway, event_dispatcher),
            review_service=ReviewApplicationService(uow_factory),
            youtube_service=YoutubeService(youtube_client, cache, ttl=settings.CACHE_YOUTUBE_TTL),
            email_relay=EmailOutboxRelay(
                uow_factory,
                email_sender,
                batch_size=settings.EMAIL_OUTBOX_BATCH_SIZE,
                max_attempts=settings.EMAIL_OUTBOX_MAX_ATTEMPTS,
                poll_interval=settings.EMAIL_OUTBOX_POLL_INTERVAL,
                claim_lease=settings.EMAIL_OUTBOX_CLAIM_LEASE,
            ),
            _closers=list(self._closers),
        )
        logger.info("Application container built")
        return container
