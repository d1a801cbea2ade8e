"""Versioned youtube metadata routers."""
