"""Building blocks shared by several bounded modules."""

from app.shared.domain.aggregate import AggregateRoot
from app.shared.domain.money import Money

__all__ = ["AggregateRoot", "Money"]
