"""National id (CPF) value object."""

import re
from dataclasses import dataclass

from escolar_identity.domain.identity.exceptions import InvalidNationalIdError

NATIONAL_ID_LENGTH = 11
_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class NationalId:
    """An 11-digit national id, stored without punctuation."""

    value: str

    def __post_init__(self) -> None:
        digits = _NON_DIGITS.sub("", self.value or "")
        if len(digits) != NATIONAL_ID_LENGTH:
            msg = f"National id must have {NATIONAL_ID_LENGTH} digits"
            raise InvalidNationalIdError(msg)
        object.__setattr__(self, "value", digits)

    def __str__(self) -> str:
        return self.value
