# 📄 File: app/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation):
# Checks the ID card (access token) a visitor shows at the door. A valid card gets the visitor's
# identity pinned to the request; a forged, expired or revoked card is turned away immediately.
# 🧪 Purpose (Technical Summary):
# Authentication middleware that validates Bearer access tokens through the container's
# AuthenticationService (signature, expiry and server-side session state) and injects the
# token payload into request.state. Requests without a token pass through; routes that need
# a user enforce it with the get_current_user dependency.
# 🔗 Dependencies:
# FastAPI/Starlette, app.shared.core.container, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration), app.shared.core.dependencies.get_current_user

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.core.exceptions import ErrorKind
from app.shared.utils.logging import user_id_var

logger = logging.getLogger(__name__)

# Never validated, even when a (possibly expired) token is attached
PUBLIC_PATHS = (
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/api/v1/auth/login",
    "/api/v1/auth/register",
    "/api/v1/auth/refresh",
    "/api/v1/payments/notifications",
)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Authentication middleware for JWT access tokens.

    On success request.state.token_payload holds the decoded claims
    (sub, email, role, jti) and the user id is bound to the log context.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.token_payload = None

        if self._is_public_path(request.url.path):
            return await call_next(request)

        token = self._extract_token(request)
        if token is None:
            return await call_next(request)

        container = request.app.state.container
        result = await container.authentication_service.validate_token(token)
        if result.is_failure:
            logger.info(f"Rejected access token on {request.method} {request.url.path}: {result.error}")
            return self._create_authentication_error(request, result.error or "Invalid token")

        request.state.token_payload = result.data
        user_token = user_id_var.set(str(result.data.get("sub", "")))
        try:
            return await call_next(request)
        finally:
            user_id_var.reset(user_token)

    def _is_public_path(self, path: str) -> bool:
        return any(path == public or path.startswith(public + "/") for public in PUBLIC_PATHS)

    def _extract_token(self, request: Request) -> Optional[str]:
        auth_header = request.headers.get("Authorization")
        if not auth_header:
            return None
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return None
        return token.strip()

    def _create_authentication_error(self, request: Request, message: str) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={
                "error": {
                    "code": "AUTHENTICATION_ERROR",
                    "kind": ErrorKind.UNAUTHENTICATED.value,
                    "message": message,
                    "details": {},
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "request_id": getattr(request.state, "request_id", None),
                }
            },
            headers={"WWW-Authenticate": "Bearer"},
        )
