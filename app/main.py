# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main switch of the learning platform: it starts everything up, connects all the parts
# together, and makes sure the platform is ready to answer requests from the web and mobile apps.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point. Builds (or receives) the ApplicationContainer,
# registers middleware, routers and the LMSException handler, starts the email outbox relay
# and releases every external resource on shutdown.
#
# 🔗 Dependencies:
# - FastAPI framework, slowapi, uvicorn
# - app.shared.config.settings, app.shared.core.container
# - app.api (middleware, v1 routers)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - Docker container entry point
# - tests (create_application with an injected container)

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.middleware import AuthenticationMiddleware, RequestLoggingMiddleware
from app.api.v1.health import health_router
from app.api.v1.router import api_v1_router
from app.shared.config.settings import get_settings
from app.shared.core.container import ApplicationContainer, ContainerBuilder
from app.shared.core.exceptions import ErrorKind, LMSException
from app.shared.core.rate_limiter import limiter
from app.shared.utils.logging import setup_logging

# Get application settings
settings = get_settings()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Builds the container unless one was injected, starts the email outbox
    relay and closes the container's resources on shutdown.
    """
    setup_logging()
    logger.info("🎓 LMS API starting up...")

    if getattr(app.state, "container", None) is None:
        app.state.container = ContainerBuilder(settings).build()
        logger.info("✅ Application container built")

    container: ApplicationContainer = app.state.container

    if settings.EMAIL_OUTBOX_RELAY_ENABLED and not settings.is_testing:
        container.email_relay.start()
        logger.info("✅ Email outbox relay started")

    try:
        yield  # Application is running
    finally:
        logger.info("🔄 LMS API shutting down...")
        try:
            await container.close()
            logger.info("✅ LMS API shutdown complete")
        except Exception as e:
            logger.error(f"❌ Shutdown error: {e}")


def create_application(container: Optional[ApplicationContainer] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        container: Pre-built container (tests inject fakes this way). When
            omitted the lifespan builds the production container.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )
    app.state.container = container
    app.state.limiter = limiter

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(AuthenticationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Process-Time"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router)
    app.include_router(api_v1_router, prefix="/api/v1")

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(LMSException)
    async def lms_exception_handler(request: Request, exc: LMSException) -> JSONResponse:
        """Render every application exception in one error envelope."""
        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": exc.error_code,
                    "kind": exc.error_kind.value,
                    "message": exc.message,
                    "details": exc.details,
                    "timestamp": exc.timestamp.isoformat(),
                    "request_id": getattr(request.state, "request_id", None),
                }
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Internal server error: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_SERVER_ERROR",
                    "kind": ErrorKind.UNEXPECTED.value,
                    "message": "An internal server error occurred",
                    "details": {"error_type": type(exc).__name__} if settings.DEBUG else {},
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                    "request_id": getattr(request.state, "request_id", None),
                }
            },
        )

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/health",
            "api_base": "/api/v1",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


# Create the FastAPI application
app = create_application()


def main():
    """Run the application with uvicorn (python -m app.main)."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1 if settings.RELOAD else settings.WORKERS,
    )


if __name__ == "__main__":
    main()
