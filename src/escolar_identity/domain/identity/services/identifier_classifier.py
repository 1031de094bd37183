"""Classify raw login identifiers as email, national id or registration number.

Users log in with whatever they were handed: a real email, the synthesized
email, a CPF (with or without punctuation) or a student registration number
(RA). The classifier decides which lookup to run.
"""

import re

from escolar_identity.domain.identity.value_objects import (
    NATIONAL_ID_LENGTH,
    ClassifiedIdentifier,
    IdentifierKind,
)
from escolar_identity.domain.identity.value_objects.email import EMAIL_PATTERN

# Everything except word characters and the separators used in emails/CPFs
_PADDING = re.compile(r"[^\w@.-]")
_NON_DIGITS = re.compile(r"\D")
_LETTERS = re.compile(r"[^\W\d_]")

# {year}{1-3 initials}{4-digit suffix}, e.g. 2024MS0042
REGISTRATION_NUMBER_PATTERN = re.compile(r"^\d{4}[A-Z]{1,3}\d{4}$")
_NUMERIC = re.compile(r"^\d+$")


def strip_padding(raw: str) -> str:
    return _PADDING.sub("", raw or "")


def digits_only(raw: str) -> str:
    return _NON_DIGITS.sub("", raw or "")


def classify(raw: str) -> ClassifiedIdentifier:
    """Classify a raw login identifier.

    Total function: never raises, falls back to ``UNKNOWN``. An 11-digit
    number is always a national id, even though a purely numeric
    registration number of that length would also fit.
    """
    cleaned = strip_padding(raw)

    if EMAIL_PATTERN.match(cleaned):
        return ClassifiedIdentifier(IdentifierKind.EMAIL, cleaned)

    digits = digits_only(cleaned)
    if len(digits) == NATIONAL_ID_LENGTH and not _LETTERS.search(cleaned):
        return ClassifiedIdentifier(IdentifierKind.NATIONAL_ID, digits)

    if REGISTRATION_NUMBER_PATTERN.match(cleaned) or _NUMERIC.match(cleaned):
        return ClassifiedIdentifier(IdentifierKind.REGISTRATION_NUMBER, cleaned)

    return ClassifiedIdentifier(IdentifierKind.UNKNOWN, cleaned)
