# 📄 File: app/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as a package so the platform can find its web endpoints and the
# helpers that look at every request.
# 🧪 Purpose (Technical Summary):
# Package initialization for the HTTP layer: API version constants and the exceptions most
# endpoint code raises.
# 🔗 Dependencies:
# app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# app.main, app.api.v1.router

"""
LMS API Package

Structure:
    api/
    ├── __init__.py          # This file
    ├── middleware/          # request logging, token authentication
    └── v1/                  # API version 1
        ├── __init__.py      # route prefixes and tags
        ├── router.py        # Main v1 router
        └── health.py        # Health check endpoints
"""

__version__ = "1.0.0"
__description__ = "LMS REST API"

API_PREFIX = "/api"
CURRENT_VERSION = "v1"
SUPPORTED_VERSIONS = ["v1"]

from app.shared.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    LMSException,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "LMSException",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "API_PREFIX",
    "CURRENT_VERSION",
    "SUPPORTED_VERSIONS",
]
