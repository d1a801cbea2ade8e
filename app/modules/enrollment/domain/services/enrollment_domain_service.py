# 📄 File: app/modules/enrollment/domain/services/enrollment_domain_service.py
# 🧭 Purpose (Layman Explanation):
# Decides who is allowed to sign up for a course and how much they have to pay.
# 🧪 Purpose (Technical Summary):
# Pure eligibility and pricing rules spanning User and Course aggregates.
# 🔗 Dependencies:
# user_management User, course_management Course, app.shared.domain.Money
# 🔄 Connected Modules / Calls From:
# EnrollmentApplicationService.enroll_course

import logging

from app.modules.course_management.domain.models.course import Course
from app.modules.user_management.domain.models.user import User
from app.shared.domain.money import Money

logger = logging.getLogger(__name__)


class EnrollmentDomainService:
    """Enrollment eligibility and pricing."""

    def can_user_enroll_course(self, user: User, course: Course) -> bool:
        """
        Check whether a user may enroll in a course.

        Rules:
        - the user must be active
        - the course must be published
        - instructors cannot enroll in their own course
        """
        if not user.is_active:
            logger.debug(f"Enrollment refused: user {user.id} is inactive")
            return False

        if not course.can_enroll():
            logger.debug(f"Enrollment refused: course {course.id} is {course.status.value}")
            return False

        if user.is_instructor() and course.is_owned_by(user.id):
            logger.debug(f"Enrollment refused: instructor {user.id} owns course {course.id}")
            return False

        return True

    def calculate_enrollment_price(self, course: Course, user: User) -> Money:
        # Instructors preview other instructors' courses for free
        if user.is_instructor() and not course.is_owned_by(user.id):
            return Money.zero()
        return course.price
