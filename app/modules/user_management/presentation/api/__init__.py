"""User management REST API."""
