# 📄 File: app/modules/notifications/application/services/email_outbox_relay.py
# 🧭 Purpose (Layman Explanation):
# The postman: regularly picks up emails waiting in the queue and sends them,
# retrying a few times before giving up on one.
#
# 🧪 Purpose (Technical Summary):
# EmailOutboxRelay claims PENDING outbox rows in batches (status SENDING, committed before
# any send) so concurrent relays never deliver the same row. Each message is then delivered
# and its status recorded in its own unit of work, so one bad message never blocks the rest.
# A claim left behind by a crashed relay is picked up again once its lease expires.
# start()/stop() manage an asyncio polling task inside the API process.
#
# 🔗 Dependencies:
# - asyncio, AbstractUnitOfWork, EmailSender
#
# 🔄 Connected Modules / Calls From:
# - app.main lifespan, celery_config (notifications.relay_outbox), ApplicationContainer

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from app.modules.notifications.domain.models.outbox_email import OutboxEmail, OutboxStatus
from app.modules.notifications.domain.services.email_sender import EmailSender
from app.shared.core.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


@dataclass
class RelayReport:
    """Outcome of one drain pass."""
    sent: int = 0
    retried: int = 0
    failed: int = 0

    @property
    def processed(self) -> int:
        return self.sent + self.retried + self.failed


class EmailOutboxRelay:
    """Delivers queued emails outside of the request path."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        sender: EmailSender,
        batch_size: int = 50,
        max_attempts: int = 5,
        poll_interval: float = 10.0,
        claim_lease: float = 300.0,
    ):
        self._uow_factory = uow_factory
        self._sender = sender
        self._batch_size = batch_size
        self._max_attempts = max_attempts
        self._poll_interval = poll_interval
        self._claim_lease = timedelta(seconds=claim_lease)
        self._task: Optional[asyncio.Task] = None
        self._stopping = asyncio.Event()

    async def drain_once(self) -> RelayReport:
        """Claim and deliver one batch of pending emails."""
        async with self._uow_factory() as uow:
            claimed = await uow.email_outbox.claim_pending(self._batch_size, self._claim_lease)

        report = RelayReport()
        for email in claimed:
            outcome = await self._deliver(email)
            if outcome == OutboxStatus.SENT:
                report.sent += 1
            elif outcome == OutboxStatus.FAILED:
                report.failed += 1
            else:
                report.retried += 1

        if report.processed:
            logger.info(
                f"Outbox relay pass: sent={report.sent} retried={report.retried} failed={report.failed}"
            )
        return report

    async def _deliver(self, email: OutboxEmail) -> OutboxStatus:
        try:
            await self._sender.send(email)
            email.mark_sent()
        except Exception as e:
            email.mark_attempt_failed(f"{type(e).__name__}: {e}", self._max_attempts)
            logger.warning(
                f"Email {email.id} delivery attempt {email.attempts}/{self._max_attempts} failed: {e}"
            )

        async with self._uow_factory() as uow:
            await uow.email_outbox.update(email)
        return email.status

    # =========================================================================
    # BACKGROUND LOOP
    # =========================================================================

    async def _run(self) -> None:
        logger.info(f"Email outbox relay started (interval={self._poll_interval}s)")
        while not self._stopping.is_set():
            try:
                await self.drain_once()
            except Exception as e:
                logger.error(f"Email outbox relay pass failed: {e}", exc_info=True)
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._poll_interval)
            except asyncio.TimeoutError:
                pass
        logger.info("Email outbox relay stopped")

    def start(self) -> None:
        if self._task is None or self._task.done():
            self._stopping.clear()
            self._task = asyncio.create_task(self._run(), name="email-outbox-relay")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None
