"""Versioned enrollment routers."""
