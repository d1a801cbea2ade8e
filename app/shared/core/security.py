# 📄 File: app/shared/core/security.py
# 🧭 Purpose (Layman Explanation):
# Handles the security basics: scrambling passwords so they are never stored in plain text
# and issuing the signed login tokens students and instructors use to access the platform.
# 🧪 Purpose (Technical Summary):
# JWT access/refresh token issuing and verification (python-jose), bcrypt password hashing
# (passlib), and parsing of "15m"/"7d" style lifetimes into timedeltas.
# 🔗 Dependencies:
# python-jose, passlib[bcrypt], app.shared.config.settings, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# user_management AuthenticationService / SessionService / UserApplicationService,
# authentication middleware

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.shared.config.settings import get_settings
from app.shared.core.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_DURATION_RE = re.compile(r"^(\d+)([smhd])$")
_DURATION_UNITS = {
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def parse_duration(value: str) -> timedelta:
    """
    Convert a compact duration ("30s", "15m", "1h", "7d") to a timedelta.

    Raises:
        ValidationError: If the string does not match <number><s|m|h|d>
    """
    match = _DURATION_RE.match(value or "")
    if not match:
        raise ValidationError(
            f"Invalid duration format: {value}",
            field="expires_in",
            value=value,
            constraint="^(\\d+)([smhd])$",
        )
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


class SecurityManager:
    """
    Centralized security manager for authentication.
    Handles JWT tokens and password hashing.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expires_in: Optional[str] = None,
        refresh_token_expires_in: Optional[str] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.JWT_SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.access_token_ttl = parse_duration(
            access_token_expires_in or settings.JWT_ACCESS_TOKEN_EXPIRES_IN
        )
        self.refresh_token_ttl = parse_duration(
            refresh_token_expires_in or settings.JWT_REFRESH_TOKEN_EXPIRES_IN
        )

    def _encode(self, data: Dict[str, Any], token_type: str, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": now + ttl,
            "iat": now,
            "type": token_type,
        })
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def create_access_token(self, data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """
        Create JWT access token with user data and expiration.

        Args:
            data: Token payload data (must include "sub")
            expires_delta: Custom expiration time

        Returns:
            str: Encoded JWT token
        """
        token = self._encode(data, "access", expires_delta or self.access_token_ttl)
        logger.debug(f"Access token created for user: {data.get('sub')}")
        return token

    def create_refresh_token(self, data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
        """Create JWT refresh token with extended expiration."""
        token = self._encode(data, "refresh", expires_delta or self.refresh_token_ttl)
        logger.debug(f"Refresh token created for user: {data.get('sub')}")
        return token

    def verify_token(self, token: str, token_type: str = "access") -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify
            token_type: Expected token type (access/refresh)

        Returns:
            dict: Decoded token payload

        Raises:
            AuthenticationError: If token is invalid, expired or of the wrong type
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.warning("Token has expired")
            raise AuthenticationError("Token expired")
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise AuthenticationError("Could not validate credentials")

        if payload.get("type") != token_type:
            logger.warning(f"Token type mismatch. Expected: {token_type}, Got: {payload.get('type')}")
            raise AuthenticationError("Could not validate credentials")

        if payload.get("sub") is None:
            logger.warning("Token missing subject (user_id)")
            raise AuthenticationError("Could not validate credentials")

        return payload

    def get_password_hash(self, password: str) -> str:
        """Hash password using bcrypt."""
        return pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against its bcrypt hash."""
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError as e:
            logger.warning(f"Password verification failed: {e}")
            return False
