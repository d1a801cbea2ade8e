"""Notification repository interfaces."""

from .email_outbox_repository import EmailOutboxRepository

__all__ = ["EmailOutboxRepository"]
