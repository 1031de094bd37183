"""Domain services for identifiers and credentials."""

from escolar_identity.domain.identity.services.identifier_classifier import (
    REGISTRATION_NUMBER_PATTERN,
    classify,
    digits_only,
)
from escolar_identity.domain.identity.services.password_strength import (
    ACCEPTABLE_STRENGTH,
    password_strength,
    strength_label,
)
from escolar_identity.domain.identity.services.secret_generator import (
    PASSWORD_LENGTH,
    PASSWORD_SYMBOLS,
    SecretGenerator,
)
from escolar_identity.domain.identity.services.uniqueness_resolver import (
    DEFAULT_MAX_ATTEMPTS,
    UniquenessResolver,
)

__all__ = [
    "ACCEPTABLE_STRENGTH",
    "DEFAULT_MAX_ATTEMPTS",
    "PASSWORD_LENGTH",
    "PASSWORD_SYMBOLS",
    "REGISTRATION_NUMBER_PATTERN",
    "SecretGenerator",
    "UniquenessResolver",
    "classify",
    "digits_only",
    "password_strength",
    "strength_label",
]
