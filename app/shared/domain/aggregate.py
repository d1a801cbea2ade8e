# 📄 File: app/shared/domain/aggregate.py
# 🧭 Purpose (Layman Explanation):
# Gives business objects a small "outbox" of facts that happened to them (enrolled, completed)
# so those facts can be announced once the change has been saved.
# 🧪 Purpose (Technical Summary):
# Pydantic base model for aggregate roots holding pending domain events in a private
# attribute, drained by application services after the unit of work commits.
# 🔗 Dependencies:
# pydantic, app.shared.core.event_bus
# 🔄 Connected Modules / Calls From:
# User, Course, Enrollment, LessonProgress, Payment domain models

from typing import List

from pydantic import BaseModel, ConfigDict, PrivateAttr

from app.shared.core.event_bus import DomainEvent


class AggregateRoot(BaseModel):
    """Base for domain models that raise domain events."""

    model_config = ConfigDict(validate_assignment=True)

    _domain_events: List[DomainEvent] = PrivateAttr(default_factory=list)

    def record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)

    @property
    def domain_events(self) -> List[DomainEvent]:
        return list(self._domain_events)

    def pull_domain_events(self) -> List[DomainEvent]:
        """Return pending events and clear them."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events
