"""Review domain services."""

from .review_validation_service import ReviewValidationService

__all__ = ["ReviewValidationService"]
