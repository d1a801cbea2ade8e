"""Notification domain services."""

from .email_sender import EmailSender

__all__ = ["EmailSender"]
