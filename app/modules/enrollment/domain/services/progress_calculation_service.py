# 📄 File: app/modules/enrollment/domain/services/progress_calculation_service.py
# 🧭 Purpose (Layman Explanation):
# Works out how much of a course a student has finished, counting only lessons marked as done.
# 🧪 Purpose (Technical Summary):
# Pure domain service: course progress = round-half-up(100 * completed / total), 0 for an empty
# course; completion threshold check.
# 🔗 Dependencies:
# app.modules.enrollment.domain.models
# 🔄 Connected Modules / Calls From:
# EnrollmentApplicationService (recalculation), progress DTO assembly

from typing import Iterable

from ..models.lesson_progress import LessonProgress, percentage_of


class ProgressCalculationService:
    """Course-level progress rules. Stateless."""

    def calculate_course_progress(self, progresses: Iterable[LessonProgress], total_lessons: int) -> int:
        if total_lessons == 0:
            return 0
        completed = self.count_completed(progresses)
        return min(100, percentage_of(completed, total_lessons))

    @staticmethod
    def count_completed(progresses: Iterable[LessonProgress]) -> int:
        # IN_PROGRESS lessons do not contribute partially
        return sum(1 for progress in progresses if progress.is_completed())

    def should_complete_enrollment(self, percentage: int) -> bool:
        return percentage >= 100
