# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Tells Alembic how to reach the database and which tables the platform owns, so schema
# changes can be applied the same way in development and production.
# 🧪 Purpose (Technical Summary):
# Alembic environment configuration: loads .env, imports every module's ORM models into
# DatabaseBase.metadata and runs migrations offline or over asyncpg.
# 🔗 Dependencies:
# - alembic (migration tool)
# - SQLAlchemy (ORM)
# - asyncpg (PostgreSQL async driver)
# - python-dotenv (environment variables)
# 🔄 Connected Modules / Calls From:
# - alembic CLI commands (upgrade, downgrade, revision)

import asyncio
import os
import sys
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from sqlalchemy.ext.asyncio import AsyncEngine
from alembic import context
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Add the project root to Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

# Import the database base class
from app.shared.config.database import DatabaseBase  # noqa: E402

# Import all module models so they are registered on the metadata
from app.modules.user_management.infrastructure.database.models import UserModel, SessionModel  # noqa: E402,F401
from app.modules.course_management.infrastructure.database.models import (  # noqa: E402,F401
    CategoryModel,
    CourseModel,
    LessonModel,
)
from app.modules.enrollment.infrastructure.database.models import EnrollmentModel, LessonProgressModel  # noqa: E402,F401
from app.modules.payment.infrastructure.database.models import PaymentModel  # noqa: E402,F401
from app.modules.review.infrastructure.database.models import ReviewModel  # noqa: E402,F401
from app.modules.notifications.infrastructure.database.models import EmailOutboxModel  # noqa: E402,F401

# This is the Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set the target metadata for 'autogenerate' support
target_metadata = DatabaseBase.metadata


def get_database_url() -> str:
    """
    Get database URL from environment variables.

    Returns:
        str: Database connection URL
    """
    database_url = os.getenv("DATABASE_URL")

    if database_url:
        # Migrations share the application's asyncpg driver
        if database_url.startswith("postgresql://"):
            database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return database_url

    db_host = os.getenv("DB_HOST", "localhost")
    db_port = os.getenv("DB_PORT", "5432")
    db_user = os.getenv("DB_USER", "postgres")
    db_password = os.getenv("DB_PASSWORD", "password")
    db_name = os.getenv("DB_NAME", "lms_db")

    return f"postgresql+asyncpg://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Calls to context.execute() here emit the given string to the script output.
    """
    context.configure(
        url=get_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        render_item=render_item,
    )

    with context.begin_transaction():
        context.run_migrations()


def render_item(type_, obj, autogen_context):
    """Render PostgreSQL UUID columns with the dialect import."""
    if type_ == "type" and obj.__class__.__name__ == "UUID":
        autogen_context.imports.add("from sqlalchemy.dialects import postgresql")
        return "postgresql.UUID(as_uuid=True)"
    return False


async def run_async_migrations() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_database_url()

    connectable = AsyncEngine(
        engine_from_config(
            configuration,
            prefix="sqlalchemy.",
            poolclass=pool.NullPool,
            future=True,
        )
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    """Run migrations against a live asyncpg connection."""
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
