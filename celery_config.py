# 📄 File: celery_config.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for the background worker that does jobs nobody should wait for: sending the
# queued emails and clearing out expired login sessions on a schedule.
#
# 🧪 Purpose (Technical Summary):
# Celery configuration with Redis as broker and result backend, queue routing, a beat
# schedule and the periodic tasks. Each task runs one asyncio pass over the same
# application services the API uses and disposes the database engine afterwards.
#
# 🔗 Dependencies:
# - celery, kombu
# - Redis server (message broker)
# - app.shared.config.settings, notifications relay, SessionService
#
# 🔄 Connected Modules / Calls From:
# - celery worker / beat processes (celery -A celery_config worker -B)

import asyncio
import logging
import os
from datetime import timedelta
from typing import Any, Dict

from celery import Celery
from kombu import Queue

from app.shared.config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# =============================================================================
# CELERY CONFIGURATION CLASS
# =============================================================================


class CeleryConfig:
    """
    Celery configuration class for the LMS backend.

    Defines all settings for task execution, routing and scheduling.
    """

    # =========================================================================
    # BROKER AND BACKEND SETTINGS
    # =========================================================================

    broker_url = settings.CELERY_BROKER_URL
    result_backend = settings.CELERY_RESULT_BACKEND

    broker_connection_retry_on_startup = True
    broker_connection_max_retries = 10
    broker_pool_limit = 10

    result_expires = timedelta(hours=24)

    # =========================================================================
    # TASK SETTINGS
    # =========================================================================

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]
    timezone = "UTC"
    enable_utc = True

    task_default_queue = "default"

    # Task execution limits
    task_time_limit = 300  # 5 minutes hard limit
    task_soft_time_limit = 240
    task_acks_late = True
    worker_prefetch_multiplier = 1
    task_reject_on_worker_lost = True

    # =========================================================================
    # QUEUE DEFINITIONS
    # =========================================================================

    task_routes = {
        "notifications.*": {"queue": "notifications"},
        "maintenance.*": {"queue": "low_priority"},
    }

    task_queues = (
        Queue("notifications", routing_key="notifications"),
        Queue("low_priority", routing_key="low_priority"),
        Queue("default", routing_key="default"),
    )

    # =========================================================================
    # WORKER SETTINGS
    # =========================================================================

    worker_max_tasks_per_child = 1000
    worker_concurrency = int(os.getenv("CELERY_WORKER_CONCURRENCY", 4))
    worker_hijack_root_logger = False

    # =========================================================================
    # BEAT SCHEDULER SETTINGS
    # =========================================================================

    beat_schedule = {
        "relay-email-outbox": {
            "task": "notifications.relay_outbox",
            "schedule": timedelta(seconds=settings.EMAIL_OUTBOX_POLL_INTERVAL),
        },
        "cleanup-expired-sessions": {
            "task": "maintenance.cleanup_expired_sessions",
            "schedule": timedelta(hours=12),  # Twice daily
        },
    }

    task_track_started = True


class DevelopmentCeleryConfig(CeleryConfig):
    worker_log_level = "DEBUG"


class ProductionCeleryConfig(CeleryConfig):
    worker_log_level = "INFO"
    worker_max_tasks_per_child = 5000


def get_celery_config() -> CeleryConfig:
    """Configuration matching the current ENVIRONMENT."""
    config_map = {
        "development": DevelopmentCeleryConfig,
        "staging": ProductionCeleryConfig,
        "production": ProductionCeleryConfig,
    }
    return config_map.get(settings.ENVIRONMENT, DevelopmentCeleryConfig)()


# =============================================================================
# CELERY APPLICATION INSTANCE
# =============================================================================

app = Celery("lms_backend")
app.config_from_object(get_celery_config())


# =============================================================================
# TASK BODIES
# =============================================================================

async def relay_outbox_once() -> Dict[str, Any]:
    """Deliver one batch of queued emails."""
    from app.modules.notifications.application.services.email_outbox_relay import EmailOutboxRelay
    from app.modules.notifications.infrastructure.email.smtp_sender import SmtpEmailSender
    from app.shared.config.database import close_database, get_async_session_factory
    from app.shared.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork

    session_factory = get_async_session_factory()
    relay = EmailOutboxRelay(
        lambda: SqlAlchemyUnitOfWork(session_factory),
        SmtpEmailSender(settings),
        batch_size=settings.EMAIL_OUTBOX_BATCH_SIZE,
        max_attempts=settings.EMAIL_OUTBOX_MAX_ATTEMPTS,
        claim_lease=settings.EMAIL_OUTBOX_CLAIM_LEASE,
    )
    try:
        report = await relay.drain_once()
    finally:
        await close_database()
    return {"sent": report.sent, "retried": report.retried, "failed": report.failed}


async def cleanup_sessions_once() -> int:
    from app.modules.user_management.application.services.session_service import SessionService
    from app.shared.config.database import close_database, get_async_session_factory
    from app.shared.core.security import SecurityManager
    from app.shared.infrastructure.database.unit_of_work import SqlAlchemyUnitOfWork

    session_factory = get_async_session_factory()
    service = SessionService(lambda: SqlAlchemyUnitOfWork(session_factory), SecurityManager())
    try:
        return await service.cleanup_expired_sessions()
    finally:
        await close_database()


# =============================================================================
# TASKS
# =============================================================================

@app.task(name="notifications.relay_outbox")
def relay_outbox() -> Dict[str, Any]:
    """Periodic email outbox delivery pass."""
    report = asyncio.run(relay_outbox_once())
    if report["sent"] or report["failed"]:
        logger.info(f"Outbox relay task: {report}")
    return report


@app.task(name="maintenance.cleanup_expired_sessions")
def cleanup_expired_sessions() -> int:
    removed = asyncio.run(cleanup_sessions_once())
    logger.info(f"Expired sessions cleaned up: {removed}")
    return removed


if __name__ == "__main__":
    app.start()
