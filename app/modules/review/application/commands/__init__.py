from .review_commands import CreateReviewCommand, DeleteReviewCommand, UpdateReviewCommand

__all__ = ["CreateReviewCommand", "DeleteReviewCommand", "UpdateReviewCommand"]
