# 📄 File: app/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# A quick checkup endpoint that tells load balancers and operators whether the platform and
# the things it depends on (database, cache) are working.
# 🧪 Purpose (Technical Summary):
# Liveness (/health) and readiness (/health/ready) checks. Readiness checks the database
# with SELECT 1 and pings the cache; any failure yields 503 with per-component detail.
# 🔗 Dependencies:
# FastAPI, app.shared.config.database, app.shared.core.dependencies
# 🔄 Connected Modules / Calls From:
# app.main (mounted without prefix), monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.shared.config.database import check_database_health
from app.shared.config.settings import get_settings
from app.shared.core.container import ApplicationContainer
from app.shared.core.dependencies import get_container

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get("/health", summary="Liveness check", tags=["Health Check"])
async def health_check() -> dict:
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "lms-api",
        "version": get_settings().APP_VERSION,
    }


@health_router.get("/health/ready", summary="Readiness check", tags=["Health Check"])
async def readiness_check(container: ApplicationContainer = Depends(get_container)) -> JSONResponse:
    """Database and cache connectivity."""
    components = {
        "database": await check_database_health(),
        "cache": {"status": "healthy" if await container.cache.ping() else "unhealthy"},
    }
    healthy = all(c["status"] == "healthy" for c in components.values())
    if not healthy:
        logger.warning(f"Readiness check failed: {components}")

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "ready" if healthy else "not_ready",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "components": components,
        },
    )
