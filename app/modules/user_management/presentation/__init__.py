"""User management presentation layer (REST API)."""
