"""
Email outbox repository interface.
"""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

from ..models.outbox_email import OutboxEmail


class EmailOutboxRepository(ABC):
    """Persistence for queued emails. Writes join the caller's unit of work."""

    @abstractmethod
    async def add(self, email: OutboxEmail) -> OutboxEmail:
        pass

    @abstractmethod
    async def get_by_id(self, email_id: UUID) -> Optional[OutboxEmail]:
        pass

    @abstractmethod
    async def claim_pending(self, limit: int, lease: timedelta) -> List[OutboxEmail]:
        """
        Mark up to ``limit`` deliverable messages as SENDING and return them, oldest first.

        Deliverable means PENDING, or SENDING with a claim older than ``lease`` (a relay
        that died mid-send). Rows claimed by a concurrent caller are never returned twice.
        """
        pass

    @abstractmethod
    async def update(self, email: OutboxEmail) -> OutboxEmail:
        pass
