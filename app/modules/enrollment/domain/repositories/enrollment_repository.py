# 📄 File: app/modules/enrollment/domain/repositories/enrollment_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how enrollments are stored and looked up (by id, by student, by student + course).
# 🧪 Purpose (Technical Summary):
# Repository interface for the Enrollment aggregate.
# 🔗 Dependencies:
# Domain models (Enrollment), typing, abc
# 🔄 Connected Modules / Calls From:
# EnrollmentApplicationService, ReviewApplicationService, PaymentApplicationService

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..models.enrollment import Enrollment, EnrollmentStatus


class EnrollmentRepository(ABC):
    """
    Repository interface for Enrollment persistence.

    The (user_id, course_id) pair is unique; create raises ConflictError on a duplicate.
    """

    @abstractmethod
    async def create(self, enrollment: Enrollment) -> Enrollment:
        pass

    @abstractmethod
    async def get_by_id(self, enrollment_id: UUID) -> Optional[Enrollment]:
        pass

    @abstractmethod
    async def get_by_user_id(
        self,
        user_id: UUID,
        status: Optional[EnrollmentStatus] = None,
        course_id: Optional[UUID] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Enrollment]:
        """Enrollments of a user, newest first."""
        pass

    @abstractmethod
    async def get_by_user_and_course(self, user_id: UUID, course_id: UUID) -> Optional[Enrollment]:
        pass

    @abstractmethod
    async def update(self, enrollment: Enrollment) -> Enrollment:
        pass

    @abstractmethod
    async def delete(self, enrollment_id: UUID) -> bool:
        pass
