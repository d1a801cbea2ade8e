"""Versioned payment routers."""
