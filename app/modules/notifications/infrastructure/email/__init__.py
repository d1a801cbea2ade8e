"""SMTP delivery."""

from .smtp_sender import SmtpEmailSender

__all__ = ["SmtpEmailSender"]
