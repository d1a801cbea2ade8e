"""
SQLAlchemy implementation of the email outbox repository.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.notifications.domain.models.outbox_email import OutboxEmail, OutboxStatus
from app.modules.notifications.domain.repositories.email_outbox_repository import EmailOutboxRepository
from app.modules.notifications.infrastructure.database.models import EmailOutboxModel
from app.shared.core.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class EmailOutboxRepositoryImpl(EmailOutboxRepository):
    """SQLAlchemy implementation of the EmailOutboxRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, email: OutboxEmail) -> OutboxEmail:
        try:
            self._session.add(EmailOutboxModel(
                id=email.id,
                recipient=email.recipient,
                subject=email.subject,
                body_text=email.body_text,
                body_html=email.body_html,
                status=email.status.value,
                attempts=email.attempts,
                created_at=email.created_at,
            ))
            await self._session.flush()
            logger.debug(f"Queued email {email.id} to {email.recipient}")
            return email
        except SQLAlchemyError as e:
            logger.error(f"Database error queuing email: {str(e)}")
            raise RepositoryError(f"Failed to queue email: {str(e)}", "email_outbox", "add") from e

    async def get_by_id(self, email_id: UUID) -> Optional[OutboxEmail]:
        try:
            model = await self._session.get(EmailOutboxModel, email_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to retrieve email: {str(e)}", "email_outbox", "get_by_id") from e

    async def claim_pending(self, limit: int, lease: timedelta) -> List[OutboxEmail]:
        try:
            lease_cutoff = datetime.now(timezone.utc) - lease
            stmt = (
                select(EmailOutboxModel)
                .where(or_(
                    EmailOutboxModel.status == OutboxStatus.PENDING.value,
                    and_(
                        EmailOutboxModel.status == OutboxStatus.SENDING.value,
                        EmailOutboxModel.claimed_at < lease_cutoff,
                    ),
                ))
                .order_by(EmailOutboxModel.created_at)
                .limit(limit)
                .with_for_update(skip_locked=True)
            )
            result = await self._session.execute(stmt)

            claimed = []
            for model in result.scalars().all():
                email = self._model_to_domain(model)
                email.claim()
                model.status = email.status.value
                model.claimed_at = email.claimed_at
                claimed.append(email)
            await self._session.flush()

            if claimed:
                logger.debug(f"Claimed {len(claimed)} outbox emails")
            return claimed
        except SQLAlchemyError as e:
            logger.error(f"Database error claiming pending emails: {str(e)}")
            raise RepositoryError(f"Failed to claim pending emails: {str(e)}", "email_outbox", "claim_pending") from e

    async def update(self, email: OutboxEmail) -> OutboxEmail:
        try:
            model = await self._session.get(EmailOutboxModel, email.id)
            if model is None:
                raise RepositoryError(f"Email {email.id} does not exist", "email_outbox", "update")
            model.status = email.status.value
            model.attempts = email.attempts
            model.last_error = email.last_error
            model.claimed_at = email.claimed_at
            model.sent_at = email.sent_at
            await self._session.flush()
            return email
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to update email: {str(e)}", "email_outbox", "update") from e

    def _model_to_domain(self, model: EmailOutboxModel) -> OutboxEmail:
        return OutboxEmail(
            id=model.id,
            recipient=model.recipient,
            subject=model.subject,
            body_text=model.body_text,
            body_html=model.body_html,
            status=OutboxStatus(model.status),
            attempts=model.attempts,
            last_error=model.last_error,
            created_at=model.created_at,
            claimed_at=model.claimed_at,
            sent_at=model.sent_at,
        )
