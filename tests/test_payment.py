"""Tests for the Midtrans gateway adapter and payment notifications."""

from decimal import Decimal
from uuid import uuid4

import pytest

from app.modules.enrollment.domain.models.enrollment import Enrollment
from app.modules.payment.application.services.payment_application_service import PaymentApplicationService
from app.modules.payment.domain.models.payment import Payment, TransactionStatus
from app.modules.payment.infrastructure.gateway.midtrans_service import (
    MidtransPaymentService,
    map_transaction_status,
    notification_signature,
)
from app.shared.core.exceptions import BusinessRuleViolationError, ErrorKind, ValidationError
from app.shared.domain.money import Money

from tests.fakes import MIDTRANS_SERVER_KEY

ORDER_ID = "ORDER-test-1700000000000"


def _notification(transaction_status="settlement", status_code="200", gross_amount="150000.00", **overrides):
    payload = {
        "order_id": ORDER_ID,
        "status_code": status_code,
        "gross_amount": gross_amount,
        "transaction_status": transaction_status,
        "transaction_id": "txn-42",
        "payment_type": "bank_transfer",
        "fraud_status": "accept",
        "transaction_time": "2024-01-15 10:00:00",
        "settlement_time": "2024-01-15 10:05:00",
    }
    payload.update(overrides)
    payload.setdefault(
        "signature_key",
        notification_signature(payload["order_id"], payload["status_code"], payload["gross_amount"], MIDTRANS_SERVER_KEY),
    )
    return payload


@pytest.fixture
def payment_service(uow_factory, payment_gateway, dispatcher):
    return PaymentApplicationService(uow_factory, payment_gateway, dispatcher)


@pytest.fixture
def enrollment(database, student):
    return database.add("enrollments", Enrollment.create(student.id, uuid4(), Decimal("150000")))


@pytest.fixture
def pending_payment(database, enrollment):
    return database.add("payments", Payment.create(enrollment.id, Decimal("150000"), ORDER_ID))


class TestGatewayHelpers:
    """Tests for the pure gateway helpers."""

    @pytest.mark.parametrize("raw, expected", [
        ("capture", TransactionStatus.SETTLEMENT),
        ("settlement", TransactionStatus.SETTLEMENT),
        ("SETTLEMENT", TransactionStatus.SETTLEMENT),
        ("pending", TransactionStatus.PENDING),
        ("deny", TransactionStatus.DENY),
        ("cancel", TransactionStatus.CANCEL),
        ("expire", TransactionStatus.EXPIRE),
        ("failure", TransactionStatus.FAILURE),
        ("refund", TransactionStatus.PENDING),
        (None, TransactionStatus.PENDING),
    ])
    def test_status_mapping(self, raw, expected):
        assert map_transaction_status(raw) == expected

    def test_order_id_format(self):
        enrollment_id = uuid4()

        order_id = MidtransPaymentService.generate_order_id(enrollment_id)

        prefix, timestamp = order_id.rsplit("-", 1)
        assert prefix == f"ORDER-{enrollment_id}"
        assert timestamp.isdigit() and len(timestamp) >= 13

    def test_signature_verification(self, payment_gateway):
        assert payment_gateway.verify_signature(_notification())
        assert not payment_gateway.verify_signature(_notification(signature_key="forged"))
        assert not payment_gateway.verify_signature({"order_id": ORDER_ID})

    def test_signature_covers_amount(self, payment_gateway):
        payload = _notification()
        payload["gross_amount"] = "1.00"

        assert not payment_gateway.verify_signature(payload)


class TestSnapCheckout:
    """Tests for opening a Snap checkout."""

    @pytest.mark.asyncio
    async def test_gross_amount_matches_stored_payment(self, payment_gateway, snap_client, uow_factory):
        async with uow_factory() as uow:
            payment = await payment_gateway.create_payment(uow.payments, uuid4(), Money.create("150000.00"))

        sent = snap_client.requests[0]["data"]["transaction_details"]["gross_amount"]
        assert sent == 150000
        assert payment.gross_amount.amount == Decimal(sent)
        assert payment.snap_token == "snap-token-123"

    @pytest.mark.asyncio
    async def test_fractional_amount_is_rejected(self, payment_gateway, snap_client, uow_factory, database):
        with pytest.raises(ValidationError):
            async with uow_factory() as uow:
                await payment_gateway.create_payment(uow.payments, uuid4(), Money.create("99.50"))

        assert snap_client.requests == []
        assert database.all("payments") == []


class TestPaymentModel:
    """Tests for Payment state changes."""

    def test_only_pending_can_be_cancelled(self):
        payment = Payment.create(uuid4(), Decimal("10"), ORDER_ID)
        payment.update_from_gateway(TransactionStatus.SETTLEMENT, gateway_response={})

        with pytest.raises(BusinessRuleViolationError):
            payment.cancel()
        assert payment.can_be_refunded()

    def test_gateway_update_keeps_known_values(self):
        payment = Payment.create(uuid4(), Decimal("10"), ORDER_ID)
        payment.update_from_gateway(TransactionStatus.PENDING, {}, transaction_id="txn-1", payment_type="gopay")

        payment.update_from_gateway(TransactionStatus.SETTLEMENT, {"status": "settlement"})

        assert payment.transaction_id == "txn-1"
        assert payment.payment_type == "gopay"
        assert payment.gateway_response == {"status": "settlement"}

    def test_settled_event_raised_once(self):
        payment = Payment.create(uuid4(), Decimal("10"), ORDER_ID)

        payment.update_from_gateway(TransactionStatus.SETTLEMENT, {})
        payment.update_from_gateway(TransactionStatus.SETTLEMENT, {})

        assert [e.event_type for e in payment.pull_domain_events()] == ["payment.settled"]


class TestPaymentNotifications:
    """Tests for PaymentApplicationService.process_notification."""

    @pytest.mark.asyncio
    async def test_settlement_updates_payment(self, payment_service, database, pending_payment, recorder):
        result = await payment_service.process_notification(_notification())

        payment = result.unwrap()
        assert payment.status == TransactionStatus.SETTLEMENT
        assert payment.transaction_id == "txn-42"
        assert payment.payment_type == "bank_transfer"
        assert payment.settlement_time is not None
        assert database.tables["payments"][pending_payment.id].is_settled()
        assert recorder.types() == ["payment.settled"]

    @pytest.mark.asyncio
    async def test_expired_payment(self, payment_service, database, pending_payment, recorder):
        await payment_service.process_notification(_notification("expire", status_code="407"))

        assert database.tables["payments"][pending_payment.id].status == TransactionStatus.EXPIRE
        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_invalid_signature_rejected(self, payment_service, database, pending_payment):
        result = await payment_service.process_notification(_notification(signature_key="0" * 128))

        assert result.error_kind == ErrorKind.UNAUTHENTICATED
        assert database.tables["payments"][pending_payment.id].is_pending()

    @pytest.mark.asyncio
    async def test_unknown_order_is_not_found(self, payment_service, pending_payment):
        result = await payment_service.process_notification(_notification(order_id="ORDER-unknown-1"))

        assert result.error_kind == ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_enrollment_payments_require_ownership(
        self, payment_service, enrollment, pending_payment, student, make_user
    ):
        own = await payment_service.get_enrollment_payments(enrollment.id, student.id)
        other = await payment_service.get_enrollment_payments(enrollment.id, make_user().id)

        assert [p.order_id for p in own.unwrap()] == [ORDER_ID]
        assert other.error_kind == ErrorKind.ACCESS_DENIED
