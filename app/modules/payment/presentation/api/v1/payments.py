# 📄 File: app/modules/payment/presentation/api/v1/payments.py
# 🧭 Purpose (Layman Explanation):
# The door the payment provider knocks on to tell us a payment went through (or didn't),
# and the place a student checks the payments behind an enrollment.
#
# 🧪 Purpose (Technical Summary):
# FastAPI payment routes. The Midtrans HTTP notification is public but signature-checked by
# the gateway service; an invalid signature surfaces as 401. Payment listing is ownership
# checked by PaymentApplicationService.
#
# 🔗 Dependencies:
# - FastAPI router, app.shared.core.dependencies, payment_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted under /api/v1/payments), Midtrans HTTP notifications

import logging
from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Body, Depends

from app.modules.payment.presentation.api.schemas.payment_schemas import NotificationAck, PaymentResponse
from app.shared.core.container import ApplicationContainer
from app.shared.core.dependencies import CurrentUser, get_container, get_current_user, raise_for_result

logger = logging.getLogger(__name__)

payments_router = APIRouter()


@payments_router.post("/notifications", response_model=NotificationAck, summary="Payment gateway notification")
async def payment_notification(
    payload: Dict[str, Any] = Body(...),
    container: ApplicationContainer = Depends(get_container),
) -> NotificationAck:
    logger.info(f"Payment notification received for order {payload.get('order_id')}")
    payment = raise_for_result(await container.payment_service.process_notification(payload))
    return NotificationAck(order_id=payment.order_id, status=payment.status)


@payments_router.get(
    "/enrollments/{enrollment_id}",
    response_model=List[PaymentResponse],
    summary="Payments of an enrollment",
)
async def get_enrollment_payments(
    enrollment_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_container),
) -> List[PaymentResponse]:
    payments = raise_for_result(
        await container.payment_service.get_enrollment_payments(enrollment_id, current_user.user_id)
    )
    return [PaymentResponse.from_domain(p) for p in payments]
