"""Versioned review routers."""
