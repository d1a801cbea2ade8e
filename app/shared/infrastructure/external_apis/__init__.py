"""HTTP clients for third-party APIs."""

from .api_client import APIClient

__all__ = ["APIClient"]
