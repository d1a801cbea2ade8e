# 📄 File: app/modules/enrollment/application/dto/enrollment_dto.py
# 🧭 Purpose (Layman Explanation):
# The progress report a student sees: their enrollment, every lesson's status, and how many
# lessons out of the total they have finished.
#
# 🧪 Purpose (Technical Summary):
# EnrollmentProgressDTO aggregating an Enrollment with its LessonProgress rows and derived
# completed/total counts.
#
# 🔗 Dependencies:
# - pydantic, enrollment domain models
#
# 🔄 Connected Modules / Calls From:
# - EnrollmentApplicationService.get_enrollment_progress, enrollment presentation schemas

from typing import List

from pydantic import BaseModel, ConfigDict

from app.modules.enrollment.domain.models.enrollment import Enrollment
from app.modules.enrollment.domain.models.lesson_progress import LessonProgress


class EnrollmentProgressDTO(BaseModel):
    """Enrollment together with its per-lesson progress."""
    model_config = ConfigDict(frozen=True)

    enrollment: Enrollment
    lesson_progresses: List[LessonProgress]
    completed_lessons: int
    total_lessons: int
    progress_percentage: int
