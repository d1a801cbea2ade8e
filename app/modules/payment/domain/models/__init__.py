"""Payment domain models."""

from .payment import Payment, TransactionStatus

__all__ = ["Payment", "TransactionStatus"]
