# 📄 File: app/modules/notifications/domain/models/outbox_email.py
# 🧭 Purpose (Layman Explanation):
# An email waiting to be sent, together with how many times sending was tried and whether it worked.
# 🧪 Purpose (Technical Summary):
# OutboxEmail entity: PENDING → SENDING (claimed by a relay) → SENT, back to PENDING for a
# retry, or FAILED after max attempts. Message factories render the welcome, enrollment
# confirmation and password changed emails.
# 🔗 Dependencies:
# pydantic, uuid, datetime, html
# 🔄 Connected Modules / Calls From:
# UserApplicationService, EnrollmentApplicationService, EmailOutboxRelay, EmailOutboxRepositoryImpl

from datetime import datetime, timedelta, timezone
from enum import Enum
from html import escape
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class OutboxStatus(str, Enum):
    """Outbox delivery status"""
    PENDING = "PENDING"
    SENDING = "SENDING"
    SENT = "SENT"
    FAILED = "FAILED"


class OutboxEmail(BaseModel):
    """Queued email message."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    recipient: str
    subject: str
    body_text: str
    body_html: Optional[str] = None
    status: OutboxStatus = OutboxStatus.PENDING
    attempts: int = 0
    last_error: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    claimed_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None

    # =========================================================================
    # MESSAGE FACTORIES
    # =========================================================================

    @classmethod
    def welcome(cls, recipient: str, first_name: str) -> "OutboxEmail":
        return cls(
            recipient=recipient,
            subject="Welcome to LearnHub",
            body_text=(
                f"Welcome {first_name}!\n\n"
                "Thank you for joining our learning platform. We're excited to have you!\n"
                "You can now start exploring courses and begin your learning journey."
            ),
            body_html=(
                f"<h1>Welcome {escape(first_name)}!</h1>"
                "<p>Thank you for joining our learning platform. We're excited to have you!</p>"
                "<p>You can now start exploring courses and begin your learning journey.</p>"
            ),
        )

    @classmethod
    def enrollment_confirmation(cls, recipient: str, first_name: str, course_title: str) -> "OutboxEmail":
        return cls(
            recipient=recipient,
            subject=f"Enrollment Confirmed: {course_title}",
            body_text=(
                f"Hi {first_name},\n\n"
                f"You have successfully enrolled in {course_title}.\n"
                "You can now access the course content and start learning!"
            ),
            body_html=(
                "<h1>Enrollment Confirmed!</h1>"
                f"<p>Hi {escape(first_name)},</p>"
                f"<p>You have successfully enrolled in <strong>{escape(course_title)}</strong>.</p>"
                "<p>You can now access the course content and start learning!</p>"
            ),
        )

    @classmethod
    def password_changed(cls, recipient: str, first_name: str) -> "OutboxEmail":
        return cls(
            recipient=recipient,
            subject="Password changed successfully",
            body_text=(
                f"Hi {first_name},\n\n"
                "Your password has been successfully changed.\n"
                "If you didn't make this change, please contact support immediately."
            ),
            body_html=(
                "<h1>Password Changed</h1>"
                f"<p>Hi {escape(first_name)},</p>"
                "<p>Your password has been successfully changed.</p>"
                "<p>If you didn't make this change, please contact support immediately.</p>"
            ),
        )

    # =========================================================================
    # DELIVERY STATE
    # =========================================================================

    def is_pending(self) -> bool:
        return self.status == OutboxStatus.PENDING

    def claim(self) -> None:
        """Reserve the message for one relay; other relays skip it until the lease runs out."""
        self.status = OutboxStatus.SENDING
        self.claimed_at = datetime.now(timezone.utc)

    def is_claim_expired(self, lease: timedelta, now: Optional[datetime] = None) -> bool:
        if self.status != OutboxStatus.SENDING or self.claimed_at is None:
            return False
        return (now or datetime.now(timezone.utc)) - self.claimed_at >= lease

    def mark_sent(self) -> None:
        self.attempts += 1
        self.status = OutboxStatus.SENT
        self.sent_at = datetime.now(timezone.utc)
        self.last_error = None

    def mark_attempt_failed(self, error: str, max_attempts: int) -> None:
        """Record a failed delivery; the message becomes FAILED once max_attempts is reached."""
        self.attempts += 1
        self.last_error = error[:1000]
        if self.attempts >= max_attempts:
            self.status = OutboxStatus.FAILED
        else:
            self.status = OutboxStatus.PENDING
