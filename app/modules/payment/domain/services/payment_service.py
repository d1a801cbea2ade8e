# 📄 File: app/modules/payment/domain/services/payment_service.py
# 🧭 Purpose (Layman Explanation):
# The promise any payment provider has to keep: "given an enrollment and an amount,
# open a payment for it" and "tell me about updates you received".
# 🧪 Purpose (Technical Summary):
# PaymentService contract. create_payment receives the payment repository of the caller's
# unit of work so the payment row commits or rolls back with the enrollment.
# 🔗 Dependencies:
# abc, payment domain models and repository
# 🔄 Connected Modules / Calls From:
# EnrollmentApplicationService, PaymentApplicationService, ApplicationContainer

from abc import ABC, abstractmethod
from typing import Any, Dict
from uuid import UUID

from ..models.payment import Payment
from ..repositories.payment_repository import PaymentRepository
from app.shared.domain.money import Money


class PaymentService(ABC):
    """Payment gateway contract."""

    @abstractmethod
    async def create_payment(self, payments: PaymentRepository, enrollment_id: UUID, amount: Money) -> Payment:
        """
        Open a PENDING payment for an enrollment.

        Raises:
            PaymentError: If the gateway rejects the request
        """
        pass

    @abstractmethod
    async def process_notification(self, payments: PaymentRepository, payload: Dict[str, Any]) -> Payment:
        """
        Apply a gateway notification to the matching payment.

        Raises:
            AuthenticationError: If the notification signature is invalid
            NotFoundError: If no payment has the notified order id
        """
        pass
