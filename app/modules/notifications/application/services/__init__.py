"""Notification application services."""

from .email_outbox_relay import EmailOutboxRelay, RelayReport

__all__ = ["EmailOutboxRelay", "RelayReport"]
