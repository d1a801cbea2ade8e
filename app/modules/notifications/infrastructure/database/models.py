"""
SQLAlchemy model for the transactional email outbox.
"""

from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from app.shared.config.database import DatabaseBase


class EmailOutboxModel(DatabaseBase):
    """Queued email; rows are written in the business transaction and drained by the relay."""
    __tablename__ = "email_outbox"
    __table_args__ = (
        Index("ix_email_outbox_status_created_at", "status", "created_at"),
    )

    id = Column(PG_UUID(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    recipient = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    body_text = Column(Text, nullable=False)
    body_html = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="PENDING", comment="PENDING | SENDING | SENT | FAILED")
    attempts = Column(Integer, nullable=False, default=0)
    last_error = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    claimed_at = Column(DateTime(timezone=True), nullable=True, comment="Set while a relay holds the row")
    sent_at = Column(DateTime(timezone=True), nullable=True)
