"""Enrollment infrastructure layer."""
