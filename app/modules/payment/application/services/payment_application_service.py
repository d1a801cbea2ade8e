# 📄 File: app/modules/payment/application/services/payment_application_service.py
# 🧭 Purpose (Layman Explanation):
# Handles what happens after checkout: applying the gateway's "paid / failed" notifications
# and letting students see the payments for their enrollments.
#
# 🧪 Purpose (Technical Summary):
# Payment use cases returning ApplicationResult: notification processing in a unit of work
# with post-commit event dispatch, and ownership-checked payment lookup per enrollment.
#
# 🔗 Dependencies:
# - PaymentService, AbstractUnitOfWork, EventDispatcher, result_boundary
#
# 🔄 Connected Modules / Calls From:
# - payment presentation routes, ApplicationContainer

import logging
from typing import Any, Dict, List
from uuid import UUID

from app.modules.payment.domain.models.payment import Payment
from app.modules.payment.domain.services.payment_service import PaymentService
from app.shared.core.event_bus import EventDispatcher
from app.shared.core.exceptions import AuthorizationError, NotFoundError
from app.shared.core.result import ApplicationResult, result_boundary
from app.shared.core.unit_of_work import UnitOfWorkFactory

logger = logging.getLogger(__name__)


class PaymentApplicationService:
    """Payment use cases."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        payment_service: PaymentService,
        event_dispatcher: EventDispatcher,
    ):
        self._uow_factory = uow_factory
        self._payment_service = payment_service
        self._event_dispatcher = event_dispatcher

    @result_boundary("process payment notification")
    async def process_notification(self, payload: Dict[str, Any]) -> ApplicationResult[Payment]:
        async with self._uow_factory() as uow:
            payment = await self._payment_service.process_notification(uow.payments, payload)

        await self._event_dispatcher.dispatch_all(payment.pull_domain_events())
        return ApplicationResult.ok(payment)

    @result_boundary("get enrollment payments")
    async def get_enrollment_payments(self, enrollment_id: UUID, user_id: UUID) -> ApplicationResult[List[Payment]]:
        async with self._uow_factory() as uow:
            enrollment = await uow.enrollments.get_by_id(enrollment_id)
            if enrollment is None:
                raise NotFoundError("Enrollment not found", resource_type="enrollment", resource_id=str(enrollment_id))
            if not enrollment.is_owned_by(user_id):
                raise AuthorizationError(
                    "Access denied",
                    resource_type="enrollment",
                    resource_id=str(enrollment_id),
                    user_id=str(user_id),
                )
            payments = await uow.payments.get_by_enrollment_id(enrollment_id)

        return ApplicationResult.ok(payments)
