# 📄 File: app/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Configuration for connecting to the course database, managing connections efficiently,
# and making sure many students can read and save their progress at the same time.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async database configuration with connection pooling, the declarative
# model base with constraint naming conventions, and a database health check.
#
# 🔗 Dependencies:
# - SQLAlchemy async engine and session
# - app.shared.config.settings
# - PostgreSQL driver (asyncpg)
#
# 🔄 Connected Modules / Calls From:
# - app.shared.infrastructure.database.unit_of_work (session factory)
# - Module ORM models (DatabaseBase)
# - migrations/env.py (metadata)
# - app.api.v1.health (health check)

from typing import Any, Dict

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from .settings import get_settings

settings = get_settings()


# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================

class DatabaseConfig:
    """Database configuration class with environment-specific settings."""

    def __init__(self):
        self.settings = settings
        self._async_engine: AsyncEngine | None = None
        self._async_session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def database_url(self) -> str:
        """Get the database URL for async connections."""
        return self.settings.database_url

    @property
    def engine_kwargs(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine configuration based on environment."""

        base_config: Dict[str, Any] = {
            "echo": self.settings.DEBUG and self.settings.is_development,
            "connect_args": {
                "server_settings": {
                    "application_name": f"{self.settings.APP_NAME}_{self.settings.ENVIRONMENT}",
                    "jit": "off",
                }
            },
        }

        if self.settings.is_testing:
            base_config["poolclass"] = NullPool
        else:
            base_config.update({
                "pool_size": self.settings.DB_POOL_SIZE,
                "max_overflow": self.settings.DB_MAX_OVERFLOW,
                "pool_timeout": self.settings.DB_POOL_TIMEOUT,
                "pool_recycle": self.settings.DB_POOL_RECYCLE,
                "pool_pre_ping": True,
            })

            if self.settings.is_production:
                base_config["connect_args"].update({
                    "command_timeout": 30,
                    "server_settings": {
                        **base_config["connect_args"]["server_settings"],
                        "timezone": "UTC",
                        "statement_timeout": "300000",
                        "idle_in_transaction_session_timeout": "300000",
                    }
                })

        return base_config

    def create_async_engine(self) -> AsyncEngine:
        """Create and configure async database engine."""
        if self._async_engine is None:
            self._async_engine = create_async_engine(
                self.database_url,
                **self.engine_kwargs
            )
        return self._async_engine

    def create_async_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Create async session factory."""
        if self._async_session_factory is None:
            engine = self.create_async_engine()
            self._async_session_factory = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._async_session_factory

    async def close_async_engine(self):
        """Close the async database engine."""
        if self._async_engine:
            await self._async_engine.dispose()
            self._async_engine = None
            self._async_session_factory = None


# =============================================================================
# DATABASE MODELS BASE CLASS
# =============================================================================

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class DatabaseBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Every module's ORM models inherit from this class so that alembic
    sees a single metadata object.
    """
    metadata = metadata


# =============================================================================
# GLOBAL DATABASE CONFIGURATION INSTANCE
# =============================================================================

db_config = DatabaseConfig()


def get_async_engine() -> AsyncEngine:
    """Get the async database engine."""
    return db_config.create_async_engine()


def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the async session factory."""
    return db_config.create_async_session_factory()


async def close_database() -> None:
    """Dispose the engine and its pooled connections."""
    await db_config.close_async_engine()


# =============================================================================
# DATABASE HEALTH CHECK
# =============================================================================

async def check_database_health() -> Dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dict containing database health status
    """
    try:
        engine = get_async_engine()

        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            value = result.scalar()

        return {
            "status": "healthy",
            "test_query": value,
            "database_url": engine.url.render_as_string(hide_password=True),
        }

    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
            "type": type(e).__name__,
        }
