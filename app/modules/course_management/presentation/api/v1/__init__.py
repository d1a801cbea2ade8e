"""Versioned course management routers."""
