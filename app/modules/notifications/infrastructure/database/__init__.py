"""SQLAlchemy persistence for the email outbox."""

from .email_outbox_repository_impl import EmailOutboxRepositoryImpl
from .models import EmailOutboxModel

__all__ = ["EmailOutboxModel", "EmailOutboxRepositoryImpl"]
