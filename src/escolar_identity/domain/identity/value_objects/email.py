"""Email value object.

Provides validated email addresses for identity lookup and login.
"""

import re
from dataclasses import dataclass

from escolar_identity.domain.identity.exceptions import InvalidEmailError

# Validates: user@domain.tld (minimum requirements)
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address.

    Case is preserved so that synthesized addresses keep the exact
    registration number they were built from; comparisons elsewhere are
    case-insensitive.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        normalized = self.value.strip()

        if not EMAIL_PATTERN.match(normalized):
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)

        object.__setattr__(self, "value", normalized)

    @property
    def lookup_key(self) -> str:
        return self.value.lower()

    @classmethod
    def synthesize(cls, local_part: str, domain: str) -> "Email":
        return cls(f"{local_part}@{domain}")

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
