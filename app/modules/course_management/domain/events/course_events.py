# 📄 File: app/modules/course_management/domain/events/course_events.py
# 🧭 Purpose (Layman Explanation):
# Announces catalog changes, for example when an instructor publishes a course.
# 🧪 Purpose (Technical Summary):
# Domain events raised by the Course aggregate.
# 🔗 Dependencies:
# dataclasses, app.shared.core.event_bus
# 🔄 Connected Modules / Calls From:
# Course domain model, CourseApplicationService

from dataclasses import dataclass

from app.shared.core.event_bus import DomainEvent


@dataclass
class CoursePublished(DomainEvent):
    """Fired when a draft course becomes available for enrollment."""
    event_type: str = "course.published"


@dataclass
class CourseArchived(DomainEvent):
    """Fired when a course is withdrawn from the catalog."""
    event_type: str = "course.archived"


@dataclass
class CourseUnarchived(DomainEvent):
    """Fired when an archived course is brought back as a draft."""
    event_type: str = "course.unarchived"
