# 📄 File: app/shared/domain/money.py
# 🧭 Purpose (Layman Explanation):
# Represents an amount of money (a course price, what a student paid) and refuses to ever go below zero.
# 🧪 Purpose (Technical Summary):
# Immutable Decimal-backed Money value object with non-negative invariant, zero/free state,
# and add/subtract arithmetic that rejects negative results.
# 🔗 Dependencies:
# pydantic, decimal, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# Course (price), Enrollment (amount_paid), Payment (gross_amount), EnrollmentDomainService

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator

from app.shared.core.exceptions import ValidationError

Amount = Union[Decimal, int, float, str]


class Money(BaseModel):
    """Non-negative monetary amount. Zero is the distinguished "free" value."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValidationError(
                "Amount cannot be negative",
                field="amount",
                value=v,
                constraint=">= 0",
            )
        return v

    @classmethod
    def create(cls, amount: Amount) -> "Money":
        """
        Build a Money value. Floats go through str() so 0.1 stays 0.1.

        Raises:
            ValidationError: If the amount is negative
        """
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        return cls(amount=value)

    @classmethod
    def zero(cls) -> "Money":
        return cls(amount=Decimal("0"))

    def is_free(self) -> bool:
        return self.amount == 0

    def is_whole(self) -> bool:
        """True when the amount has no fractional part (99.00 but not 99.50)."""
        return self.amount == self.amount.to_integral_value()

    def add(self, other: "Money") -> "Money":
        return Money.create(self.amount + other.amount)

    def subtract(self, other: "Money") -> "Money":
        if self.amount < other.amount:
            raise ValidationError("Insufficient amount", field="amount", value=other.amount)
        return Money.create(self.amount - other.amount)

    def equals(self, other: "Money") -> bool:
        return self.amount == other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
