# 📄 File: app/modules/payment/infrastructure/gateway/midtrans_service.py
# 🧭 Purpose (Layman Explanation):
# Talks to the Midtrans payment gateway: opens a checkout for a course purchase and
# reads the gateway's later notifications about whether the student actually paid.
#
# 🧪 Purpose (Technical Summary):
# PaymentService implementation over the Midtrans Snap API. Creates the PENDING payment
# row in the caller's unit of work, requests a Snap token (HTTP Basic with the server key),
# verifies sha512 notification signatures and maps transaction statuses.
#
# 🔗 Dependencies:
# - aiohttp (BasicAuth) through the shared APIClient, hashlib, hmac
#
# 🔄 Connected Modules / Calls From:
# - EnrollmentApplicationService (create_payment), PaymentApplicationService (notifications)

import hashlib
import hmac
import logging
import time
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID

import aiohttp

from app.modules.payment.domain.models.payment import Payment, TransactionStatus
from app.modules.payment.domain.repositories.payment_repository import PaymentRepository
from app.modules.payment.domain.services.payment_service import PaymentService
from app.shared.config.settings import Settings, get_settings
from app.shared.core.exceptions import (
    AuthenticationError,
    ExternalServiceError,
    NotFoundError,
    PaymentError,
    ValidationError,
)
from app.shared.domain.money import Money
from app.shared.infrastructure.external_apis.api_client import APIClient

logger = logging.getLogger(__name__)

STATUS_MAP = {
    "capture": TransactionStatus.SETTLEMENT,
    "settlement": TransactionStatus.SETTLEMENT,
    "pending": TransactionStatus.PENDING,
    "deny": TransactionStatus.DENY,
    "cancel": TransactionStatus.CANCEL,
    "expire": TransactionStatus.EXPIRE,
    "failure": TransactionStatus.FAILURE,
}


def map_transaction_status(status: Optional[str]) -> TransactionStatus:
    """Gateway status string to TransactionStatus; unknown values stay PENDING."""
    return STATUS_MAP.get((status or "").lower(), TransactionStatus.PENDING)


def notification_signature(order_id: str, status_code: str, gross_amount: str, server_key: str) -> str:
    return hashlib.sha512(f"{order_id}{status_code}{gross_amount}{server_key}".encode("utf-8")).hexdigest()


def _parse_gateway_time(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Unparseable gateway timestamp: {value}")
        return None


class MidtransPaymentService(PaymentService):
    """Midtrans Snap payment gateway."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[APIClient] = None):
        self._settings = settings or get_settings()
        self._server_key = self._settings.MIDTRANS_SERVER_KEY
        self._client = client or APIClient(
            base_url=self._settings.midtrans_snap_url,
            api_name="midtrans",
            timeout=self._settings.EXTERNAL_API_TIMEOUT,
            auth=aiohttp.BasicAuth(self._server_key, ""),
        )

    @staticmethod
    def generate_order_id(enrollment_id: UUID) -> str:
        return f"ORDER-{enrollment_id}-{int(time.time() * 1000)}"

    async def create_payment(self, payments: PaymentRepository, enrollment_id: UUID, amount: Money) -> Payment:
        if not amount.is_whole():
            raise ValidationError(
                "Payment amount must be a whole amount",
                field="gross_amount",
                value=str(amount),
                constraint="no fractional part",
            )
        order_id = self.generate_order_id(enrollment_id)
        payment = await payments.create(Payment.create(enrollment_id, amount, order_id))

        snap_token = await self._create_snap_token(order_id, amount)
        payment.attach_snap_token(snap_token)
        payment.update_from_gateway(TransactionStatus.PENDING, gateway_response={"snap_token": snap_token})

        logger.info(f"Payment {order_id} opened for enrollment {enrollment_id} ({amount})")
        return await payments.update(payment)

    async def _create_snap_token(self, order_id: str, amount: Money) -> str:
        parameter = {
            "transaction_details": {
                "order_id": order_id,
                "gross_amount": int(amount.amount.to_integral_value()),
            },
            "credit_card": {"secure": True},
        }
        try:
            response = await self._client.post("transactions", data=parameter)
        except ExternalServiceError as e:
            logger.error(f"Snap token request failed for {order_id}: {e.message}")
            raise PaymentError(f"Payment gateway error: {e.message}", upstream_status=e.details.get("upstream_status"))

        token = response.get("token")
        if not token:
            raise PaymentError("Payment gateway returned no token", details={"order_id": order_id})
        return token

    def verify_signature(self, payload: Dict[str, Any]) -> bool:
        expected = notification_signature(
            str(payload.get("order_id", "")),
            str(payload.get("status_code", "")),
            str(payload.get("gross_amount", "")),
            self._server_key,
        )
        return hmac.compare_digest(expected, str(payload.get("signature_key", "")))

    async def process_notification(self, payments: PaymentRepository, payload: Dict[str, Any]) -> Payment:
        if not self.verify_signature(payload):
            logger.warning(f"Rejected payment notification with invalid signature for {payload.get('order_id')}")
            raise AuthenticationError("Invalid webhook signature")

        order_id = payload.get("order_id")
        payment = await payments.get_by_order_id(order_id)
        if payment is None:
            raise NotFoundError("Payment not found", resource_type="payment", resource_id=order_id)

        payment.update_from_gateway(
            status=map_transaction_status(payload.get("transaction_status")),
            gateway_response=payload,
            transaction_id=payload.get("transaction_id"),
            payment_type=payload.get("payment_type"),
            fraud_status=payload.get("fraud_status"),
            transaction_time=_parse_gateway_time(payload.get("transaction_time")),
            settlement_time=_parse_gateway_time(payload.get("settlement_time")),
        )
        logger.info(f"Payment {order_id} updated from gateway: {payment.status.value}")
        return await payments.update(payment)

    async def close(self) -> None:
        await self._client.close()
