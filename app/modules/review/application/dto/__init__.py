from .review_dto import CourseReviewsDTO

__all__ = ["CourseReviewsDTO"]
