"""Enrollment presentation layer (REST API)."""
