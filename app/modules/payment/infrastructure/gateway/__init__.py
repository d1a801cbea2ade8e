"""Payment gateway integrations."""

from .midtrans_service import MidtransPaymentService

__all__ = ["MidtransPaymentService"]
