# 📄 File: app/modules/payment/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how payments and the gateway's answers about them are stored.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for the payments table; the raw gateway response is kept as JSONB.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM (postgresql dialect types), app.shared.config.database
#
# 🔄 Connected Modules / Calls From:
# - payment_repository_impl.py, alembic migration

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID

from app.shared.config.database import DatabaseBase


class PaymentModel(DatabaseBase):
    """Payment opened with the gateway for an enrollment."""
    __tablename__ = "payments"

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    enrollment_id = Column(
        PG_UUID(as_uuid=True),
        ForeignKey("enrollments.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    gross_amount = Column(Numeric(12, 2), nullable=False)
    order_id = Column(String(120), unique=True, nullable=False, index=True, comment="Gateway order id")
    transaction_id = Column(String(120), nullable=True)
    status = Column(String(20), nullable=False, default="PENDING")
    payment_type = Column(String(50), nullable=True)
    fraud_status = Column(String(50), nullable=True)
    gateway_response = Column(JSONB, nullable=True, comment="Last raw gateway payload")
    snap_token = Column(String(255), nullable=True)
    transaction_time = Column(DateTime(timezone=True), nullable=True)
    settlement_time = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())
