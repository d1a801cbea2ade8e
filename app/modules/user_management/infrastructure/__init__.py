"""User management infrastructure: SQLAlchemy models and repositories."""
