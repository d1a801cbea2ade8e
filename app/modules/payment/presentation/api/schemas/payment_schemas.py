"""Response schemas for payment endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from app.modules.payment.domain.models.payment import Payment, TransactionStatus


class PaymentResponse(BaseModel):
    id: UUID
    enrollment_id: UUID
    order_id: str
    gross_amount: Decimal
    status: TransactionStatus
    payment_type: Optional[str] = None
    snap_token: Optional[str] = None
    transaction_time: Optional[datetime] = None
    settlement_time: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id,
            enrollment_id=payment.enrollment_id,
            order_id=payment.order_id,
            gross_amount=payment.gross_amount.amount,
            status=payment.status,
            payment_type=payment.payment_type,
            snap_token=payment.snap_token,
            transaction_time=payment.transaction_time,
            settlement_time=payment.settlement_time,
            created_at=payment.created_at,
        )


class NotificationAck(BaseModel):
    order_id: str
    status: TransactionStatus
