# 📄 File: app/modules/payment/domain/repositories/payment_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how payments are saved and found (by id, by gateway order number, by enrollment).
# 🧪 Purpose (Technical Summary):
# Repository interface for the Payment aggregate; order_id is unique.
# 🔗 Dependencies:
# Domain models (Payment), typing, abc
# 🔄 Connected Modules / Calls From:
# MidtransPaymentService, PaymentApplicationService, EnrollmentApplicationService

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..models.payment import Payment


class PaymentRepository(ABC):
    """Repository interface for Payment persistence."""

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: UUID) -> Optional[Payment]:
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> Optional[Payment]:
        pass

    @abstractmethod
    async def get_by_enrollment_id(self, enrollment_id: UUID) -> List[Payment]:
        """Payments of an enrollment, newest first."""
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        pass
