# 📄 File: app/modules/notifications/infrastructure/email/smtp_sender.py
# 🧭 Purpose (Layman Explanation):
# Actually hands an email to the mail server.
#
# 🧪 Purpose (Technical Summary):
# EmailSender implementation over aiosmtplib building multipart/alternative (plain + HTML)
# messages from OutboxEmail rows. SMTP errors propagate to the relay.
#
# 🔗 Dependencies:
# - aiosmtplib, email.mime, app.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - EmailOutboxRelay, ContainerBuilder

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Optional

import aiosmtplib

from app.modules.notifications.domain.models.outbox_email import OutboxEmail
from app.modules.notifications.domain.services.email_sender import EmailSender
from app.shared.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class SmtpEmailSender(EmailSender):
    """Email sender using async SMTP."""

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    def _build_message(self, email: OutboxEmail) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = formataddr((self._settings.SMTP_FROM_NAME, self._settings.SMTP_FROM_EMAIL))
        message["To"] = email.recipient
        message["Subject"] = email.subject
        message["Message-ID"] = make_msgid(idstring=str(email.id))

        message.attach(MIMEText(email.body_text, "plain", "utf-8"))
        if email.body_html:
            message.attach(MIMEText(email.body_html, "html", "utf-8"))
        return message

    async def send(self, email: OutboxEmail) -> None:
        message = self._build_message(email)
        await aiosmtplib.send(
            message,
            hostname=self._settings.SMTP_HOST,
            port=self._settings.SMTP_PORT,
            username=self._settings.SMTP_USER,
            password=self._settings.SMTP_PASSWORD,
            start_tls=self._settings.SMTP_START_TLS,
            timeout=self._settings.EXTERNAL_API_TIMEOUT,
        )
        logger.info(f"Email {email.id} sent to {email.recipient}: {email.subject}")
