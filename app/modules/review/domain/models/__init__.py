"""Review domain models."""

from .review import Review

__all__ = ["Review"]
