"""Enrollment REST API."""
