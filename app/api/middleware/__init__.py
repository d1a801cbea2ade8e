# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the helpers that look at every request before it reaches an endpoint.
# 🧪 Purpose (Technical Summary):
# HTTP middleware package: correlation-id request logging and access-token authentication.
# Rate limiting is handled by the shared slowapi limiter, not by a middleware here.
# 🔗 Dependencies:
# Starlette middleware, app.shared.core
# 🔄 Connected Modules / Calls From:
# app.main

"""
Middleware stack order (outermost first):
    1. RequestLoggingMiddleware (request id, timing)
    2. AuthenticationMiddleware (token validation)
    3. Application routes
"""

from .authentication import AuthenticationMiddleware
from .logging import RequestLoggingMiddleware

__all__ = ["AuthenticationMiddleware", "RequestLoggingMiddleware"]
