"""
Rate limiting for the LMS API.
A single slowapi Limiter keyed by client address, shared by every router.
"""

import logging

from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    enabled=settings.RATE_LIMIT_ENABLED,
)

# Applied to credential endpoints (login, register)
LOGIN_RATE_LIMIT = settings.RATE_LIMIT_LOGIN
