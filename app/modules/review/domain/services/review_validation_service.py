"""
Review eligibility rules.
"""

from typing import Optional

from app.modules.enrollment.domain.models.enrollment import Enrollment
from app.modules.user_management.domain.models.user import User


class ReviewValidationService:
    """Decides whether a user may review a course they are enrolled in."""

    def can_user_review_course(self, user: User, enrollment: Optional[Enrollment]) -> bool:
        if not user.is_active:
            return False

        # Finished courses remain reviewable
        if enrollment is None or not (enrollment.is_active() or enrollment.is_completed()):
            return False

        return enrollment.progress_percentage > 0
