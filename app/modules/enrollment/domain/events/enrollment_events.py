# 📄 File: app/modules/enrollment/domain/events/enrollment_events.py
# 🧭 Purpose (Layman Explanation):
# The milestones of a student's journey in a course: enrolled, finished a lesson,
# finished the course, or cancelled.
# 🧪 Purpose (Technical Summary):
# Domain events raised by Enrollment and LessonProgress, dispatched after commit.
# 🔗 Dependencies:
# dataclasses, app.shared.core.event_bus
# 🔄 Connected Modules / Calls From:
# Enrollment, LessonProgress, EnrollmentApplicationService

from dataclasses import dataclass

from app.shared.core.event_bus import DomainEvent


@dataclass
class UserEnrolled(DomainEvent):
    """Fired when a new enrollment is created."""
    event_type: str = "enrollment.created"


@dataclass
class EnrollmentCompleted(DomainEvent):
    """Fired when an enrollment reaches 100% and becomes COMPLETED."""
    event_type: str = "enrollment.completed"


@dataclass
class EnrollmentCancelled(DomainEvent):
    """Fired when an enrollment is cancelled."""
    event_type: str = "enrollment.cancelled"


@dataclass
class LessonCompleted(DomainEvent):
    """Fired when a lesson progress record transitions to COMPLETED."""
    event_type: str = "lesson.completed"
