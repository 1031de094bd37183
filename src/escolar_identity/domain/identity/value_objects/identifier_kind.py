"""Login identifier classification."""

from dataclasses import dataclass
from enum import Enum


class IdentifierKind(str, Enum):
    """Which scheme a raw login identifier belongs to."""

    EMAIL = "email"
    NATIONAL_ID = "national_id"
    REGISTRATION_NUMBER = "registration_number"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ClassifiedIdentifier:
    """A login identifier together with its detected scheme.

    Attributes
    ----------
    kind
        The detected scheme
    value
        The cleaned identifier: digits only for national ids, otherwise
        the input with padding characters stripped
    """

    kind: IdentifierKind
    value: str
