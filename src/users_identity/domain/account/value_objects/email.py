"""Email value object.

Provides validated email addresses for account identification.
Addresses are stored as given (minus surrounding whitespace); uniqueness
is case-sensitive.
"""

import re
from dataclasses import dataclass

from users_identity.domain.account.exceptions import InvalidEmailError

# Validates: local@domain.tld (minimum requirements)
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

MAX_EMAIL_LENGTH = 255


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        stripped = self.value.strip()

        if len(stripped) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(stripped):
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)

        # frozen dataclass workaround
        object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
