"""Payment application services."""

from .payment_application_service import PaymentApplicationService

__all__ = ["PaymentApplicationService"]
