"""SQLAlchemy persistence for reviews."""

from .models import ReviewModel
from .review_repository_impl import ReviewRepositoryImpl

__all__ = ["ReviewModel", "ReviewRepositoryImpl"]
