# 📄 File: app/modules/user_management/domain/models/email.py
# 🧭 Purpose (Layman Explanation):
# Makes sure every email address we store looks like a real address and is written the same way
# (trimmed, lowercase) so "Ana@Mail.com " and "ana@mail.com" are the same person.
# 🧪 Purpose (Technical Summary):
# Immutable Email value object with format validation and case/whitespace normalization.
# 🔗 Dependencies:
# pydantic, re, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# User domain model, UserRepository lookups, AuthenticationService login

import re

from pydantic import BaseModel, ConfigDict

from app.shared.core.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Email(BaseModel):
    """Validated, normalized email address."""

    model_config = ConfigDict(frozen=True)

    value: str

    @classmethod
    def create(cls, raw: str) -> "Email":
        normalized = (raw or "").strip().lower()
        if not EMAIL_PATTERN.match(normalized):
            raise ValidationError("Invalid email format", field="email", value=raw)
        return cls(value=normalized)

    def __str__(self) -> str:
        return self.value
