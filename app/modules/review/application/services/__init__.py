from .review_application_service import ReviewApplicationService

__all__ = ["ReviewApplicationService"]
