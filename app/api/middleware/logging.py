# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to the platform: what was asked for, how it went and
# how long it took, with a tracking number that also appears on every related log line.
# 🧪 Purpose (Technical Summary):
# Request logging middleware that assigns or propagates X-Request-ID, binds it to the logging
# context vars for the duration of the request and logs method, path, status and timing.
# Health checks are skipped. Sensitive headers are never logged.
# 🔗 Dependencies:
# Starlette BaseHTTPMiddleware, app.shared.utils.logging (log_context)
# 🔄 Connected Modules / Calls From:
# app.main (middleware registration)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request/response logging with correlation ids."""

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
        self.excluded_paths = {"/health", "/health/ready", "/favicon.ico"}

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        if request.url.path in self.excluded_paths:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        start_time = time.perf_counter()
        with log_context(request_id=request_id):
            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                logger.error(
                    f"{request.method} {request.url.path} raised {type(e).__name__} after {elapsed:.3f}s",
                    exc_info=True,
                )
                raise

            elapsed = time.perf_counter() - start_time
            message = f"{request.method} {request.url.path} -> {response.status_code} ({elapsed:.3f}s)"
            if response.status_code >= 500:
                logger.error(message)
            elif elapsed > self.slow_request_threshold:
                logger.warning(f"Slow request: {message}")
            else:
                logger.info(message)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.3f}"
        return response
