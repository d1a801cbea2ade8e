"""
Domain event dispatching for the LMS application.
Lets modules react to things that happened (a student enrolled, a course
was published) without the originating service knowing about them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import uuid4

from app.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass
class DomainEvent:
    """
    Base class for all domain events.
    Events represent something that happened in the domain.
    """
    event_type: str = "domain.event"
    aggregate_id: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        data = asdict(self)
        data["occurred_at"] = self.occurred_at.isoformat()
        return data


class EventHandler(ABC):
    """
    Abstract base class for event handlers.
    Each handler processes one event type, or every event when subscribed with "*".
    """

    @property
    @abstractmethod
    def event_type(self) -> str:
        """Event type this handler processes."""
        pass

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """Handle the domain event."""
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can process the event."""
        return self.event_type in (WILDCARD, event.event_type)

    async def on_error(self, event: DomainEvent, error: Exception):
        """Handle errors during event processing."""
        logger.error(
            f"Handler {self.__class__.__name__} failed for event "
            f"{event.event_type} ({event.event_id}): {error}",
            exc_info=True
        )


class EventDispatcher:
    """
    In-process, fire-and-forget event dispatcher.

    Handlers run sequentially after the originating transaction has committed.
    A failing handler is logged and never propagates to the dispatching caller.
    """

    def __init__(self, handlers: Optional[Iterable[EventHandler]] = None):
        self._subscriptions: Dict[str, List[EventHandler]] = {}
        for handler in handlers or ():
            self.subscribe(handler)

    def subscribe(self, handler: EventHandler) -> None:
        """Register a handler under its event type."""
        self._subscriptions.setdefault(handler.event_type, []).append(handler)
        logger.debug(f"Subscribed {handler.__class__.__name__} to {handler.event_type}")

    def handlers_for(self, event: DomainEvent) -> List[EventHandler]:
        return [
            *self._subscriptions.get(event.event_type, []),
            *self._subscriptions.get(WILDCARD, []),
        ]

    async def dispatch(self, event: DomainEvent) -> None:
        """Deliver one event to every matching handler."""
        handlers = self.handlers_for(event)
        if not handlers:
            logger.debug(f"No handlers for event type: {event.event_type}")
            return

        for handler in handlers:
            try:
                await handler.handle(event)
            except Exception as e:
                await handler.on_error(event, e)

    async def dispatch_all(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            await self.dispatch(event)


class AuditLogEventHandler(EventHandler):
    """Writes every domain event to the structured audit log."""

    def __init__(self):
        self._audit = get_logger("audit")

    @property
    def event_type(self) -> str:
        return WILDCARD

    async def handle(self, event: DomainEvent) -> None:
        self._audit.log_business_event(
            event_type=event.event_type,
            description=f"Domain event {event.event_type} for {event.aggregate_id}",
            entity_id=event.aggregate_id,
            entity_type=event.event_type.split(".")[0],
            extra={"event_id": event.event_id, **event.payload},
        )
