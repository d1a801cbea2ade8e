# 📄 File: app/modules/payment/domain/models/payment.py
# 🧭 Purpose (Layman Explanation):
# One payment for one enrollment: how much, the order number sent to the gateway,
# and what state the gateway says it is in (waiting, paid, cancelled, ...).
# 🧪 Purpose (Technical Summary):
# Payment aggregate with TransactionStatus lifecycle, gateway update merging,
# pending-only cancellation and refund eligibility. Raises payment.settled.
# 🔗 Dependencies:
# pydantic, uuid, datetime, app.shared.domain (Money, AggregateRoot), app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# MidtransPaymentService, PaymentApplicationService, EnrollmentApplicationService (cancel)

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union
from uuid import UUID, uuid4

from pydantic import Field, field_validator

from app.modules.payment.domain.events.payment_events import PaymentSettled
from app.shared.core.exceptions import BusinessRuleViolationError, ValidationError
from app.shared.domain.aggregate import AggregateRoot
from app.shared.domain.money import Amount, Money


class TransactionStatus(str, Enum):
    """Gateway transaction status"""
    PENDING = "PENDING"
    SETTLEMENT = "SETTLEMENT"
    CANCEL = "CANCEL"
    DENY = "DENY"
    EXPIRE = "EXPIRE"
    FAILURE = "FAILURE"


FAILED_STATUSES = frozenset({
    TransactionStatus.CANCEL,
    TransactionStatus.DENY,
    TransactionStatus.EXPIRE,
    TransactionStatus.FAILURE,
})


class Payment(AggregateRoot):
    """Payment attached to an enrollment."""

    id: UUID = Field(default_factory=uuid4)
    enrollment_id: UUID
    gross_amount: Money = Field(frozen=True)
    order_id: str = Field(frozen=True)
    transaction_id: Optional[str] = None
    status: TransactionStatus = TransactionStatus.PENDING
    payment_type: Optional[str] = None
    fraud_status: Optional[str] = None
    gateway_response: Optional[Dict[str, Any]] = None
    snap_token: Optional[str] = None
    transaction_time: Optional[datetime] = None
    settlement_time: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("order_id")
    @classmethod
    def validate_order_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValidationError("Order ID is required", field="order_id")
        return v.strip()

    @classmethod
    def create(
        cls,
        enrollment_id: UUID,
        gross_amount: Union[Money, Amount],
        order_id: str,
        snap_token: Optional[str] = None,
    ) -> "Payment":
        money = gross_amount if isinstance(gross_amount, Money) else Money.create(gross_amount)
        return cls(enrollment_id=enrollment_id, gross_amount=money, order_id=order_id, snap_token=snap_token)

    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING

    def is_settled(self) -> bool:
        return self.status == TransactionStatus.SETTLEMENT

    def is_failed(self) -> bool:
        return self.status in FAILED_STATUSES

    def update_from_gateway(
        self,
        status: TransactionStatus,
        gateway_response: Dict[str, Any],
        transaction_id: Optional[str] = None,
        payment_type: Optional[str] = None,
        fraud_status: Optional[str] = None,
        transaction_time: Optional[datetime] = None,
        settlement_time: Optional[datetime] = None,
    ) -> None:
        """Merge a gateway response; absent optional values keep their previous value."""
        was_settled = self.is_settled()

        if transaction_id:
            self.transaction_id = transaction_id
        self.status = status
        if payment_type:
            self.payment_type = payment_type
        if fraud_status:
            self.fraud_status = fraud_status
        if transaction_time:
            self.transaction_time = transaction_time
        if settlement_time:
            self.settlement_time = settlement_time
        self.gateway_response = gateway_response
        self.updated_at = datetime.now(timezone.utc)

        if self.is_settled() and not was_settled:
            self.record_event(PaymentSettled(
                aggregate_id=str(self.id),
                payload={
                    "enrollment_id": str(self.enrollment_id),
                    "order_id": self.order_id,
                    "gross_amount": str(self.gross_amount),
                },
            ))

    def attach_snap_token(self, snap_token: str) -> None:
        self.snap_token = snap_token
        self.updated_at = datetime.now(timezone.utc)

    def cancel(self) -> None:
        if not self.is_pending():
            raise BusinessRuleViolationError(
                "Only pending payments can be cancelled",
                rule="payment.cancel",
                details={"status": self.status.value},
            )
        self.status = TransactionStatus.CANCEL
        self.updated_at = datetime.now(timezone.utc)

    def can_be_refunded(self) -> bool:
        return self.is_settled()
