"""Notification domain layer."""
