"""Payment domain events."""

from .payment_events import PaymentSettled

__all__ = ["PaymentSettled"]
