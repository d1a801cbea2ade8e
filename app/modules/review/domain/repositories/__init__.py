"""Review repository interfaces."""

from .review_repository import ReviewRepository

__all__ = ["ReviewRepository"]
