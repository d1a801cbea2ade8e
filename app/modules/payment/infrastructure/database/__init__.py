"""SQLAlchemy persistence for payments."""

from .models import PaymentModel
from .payment_repository_impl import PaymentRepositoryImpl

__all__ = ["PaymentModel", "PaymentRepositoryImpl"]
