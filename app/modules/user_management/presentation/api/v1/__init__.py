"""Versioned user management routers."""
