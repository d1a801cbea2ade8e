"""
Payment domain events.
"""

from dataclasses import dataclass

from app.shared.core.event_bus import DomainEvent


@dataclass
class PaymentSettled(DomainEvent):
    """Fired when the gateway reports a payment as settled."""
    event_type: str = "payment.settled"
