"""
SQLAlchemy implementation of the payment repository.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.payment.domain.models.payment import Payment, TransactionStatus
from app.modules.payment.domain.repositories.payment_repository import PaymentRepository
from app.modules.payment.infrastructure.database.models import PaymentModel
from app.shared.core.exceptions import RepositoryError
from app.shared.domain.money import Money

logger = logging.getLogger(__name__)


class PaymentRepositoryImpl(PaymentRepository):
    """SQLAlchemy implementation of the PaymentRepository interface."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, payment: Payment) -> Payment:
        try:
            self._session.add(PaymentModel(
                id=payment.id,
                enrollment_id=payment.enrollment_id,
                gross_amount=payment.gross_amount.amount,
                order_id=payment.order_id,
                status=payment.status.value,
                snap_token=payment.snap_token,
                created_at=payment.created_at,
                updated_at=payment.updated_at,
            ))
            await self._session.flush()
            logger.info(f"Created payment {payment.order_id} for enrollment {payment.enrollment_id}")
            return payment
        except SQLAlchemyError as e:
            logger.error(f"Database error creating payment: {str(e)}")
            raise RepositoryError(f"Failed to create payment: {str(e)}", "payment", "create") from e

    async def get_by_id(self, payment_id: UUID) -> Optional[Payment]:
        try:
            model = await self._session.get(PaymentModel, payment_id)
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to retrieve payment: {str(e)}", "payment", "get_by_id") from e

    async def get_by_order_id(self, order_id: str) -> Optional[Payment]:
        try:
            result = await self._session.execute(select(PaymentModel).where(PaymentModel.order_id == order_id))
            model = result.scalar_one_or_none()
            return self._model_to_domain(model) if model else None
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to retrieve payment: {str(e)}", "payment", "get_by_order_id") from e

    async def get_by_enrollment_id(self, enrollment_id: UUID) -> List[Payment]:
        try:
            stmt = (
                select(PaymentModel)
                .where(PaymentModel.enrollment_id == enrollment_id)
                .order_by(PaymentModel.created_at.desc())
            )
            result = await self._session.execute(stmt)
            return [self._model_to_domain(model) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            raise RepositoryError(f"Failed to list payments: {str(e)}", "payment", "get_by_enrollment_id") from e

    async def update(self, payment: Payment) -> Payment:
        try:
            model = await self._session.get(PaymentModel, payment.id)
            if model is None:
                raise RepositoryError(f"Payment {payment.id} does not exist", "payment", "update")
            model.transaction_id = payment.transaction_id
            model.status = payment.status.value
            model.payment_type = payment.payment_type
            model.fraud_status = payment.fraud_status
            model.gateway_response = payment.gateway_response
            model.snap_token = payment.snap_token
            model.transaction_time = payment.transaction_time
            model.settlement_time = payment.settlement_time
            model.updated_at = payment.updated_at
            await self._session.flush()
            return payment
        except SQLAlchemyError as e:
            logger.error(f"Database error updating payment {payment.id}: {str(e)}")
            raise RepositoryError(f"Failed to update payment: {str(e)}", "payment", "update") from e

    def _model_to_domain(self, model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            enrollment_id=model.enrollment_id,
            gross_amount=Money(amount=model.gross_amount),
            order_id=model.order_id,
            transaction_id=model.transaction_id,
            status=TransactionStatus(model.status),
            payment_type=model.payment_type,
            fraud_status=model.fraud_status,
            gateway_response=model.gateway_response,
            snap_token=model.snap_token,
            transaction_time=model.transaction_time,
            settlement_time=model.settlement_time,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
