"""
Email delivery contract.
"""

from abc import ABC, abstractmethod

from ..models.outbox_email import OutboxEmail


class EmailSender(ABC):
    """Delivers one email. Raises on failure so the relay can record the attempt."""

    @abstractmethod
    async def send(self, email: OutboxEmail) -> None:
        pass
