"""Notification domain models."""

from .outbox_email import OutboxEmail, OutboxStatus

__all__ = ["OutboxEmail", "OutboxStatus"]
