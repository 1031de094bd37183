"""Identity domain: people who can log in to a school.

This domain handles:
- Identity aggregate (profile, role, first-login gate)
- Login identifiers (email, national id, registration number)
- Generation and uniqueness of synthesized credentials
"""

from escolar_identity.domain.identity.aggregates import Identity
from escolar_identity.domain.identity.exceptions import (
    AccountNotFoundError,
    EmailAlreadyExistsError,
    IdentifierExhaustedError,
    IdentityConstraintError,
    IdentityNotFoundError,
    InvalidEmailError,
    InvalidNameError,
    InvalidNationalIdError,
    NationalIdAlreadyExistsError,
    RegistrationNumberAlreadyExistsError,
    TenantNotFoundError,
)
from escolar_identity.domain.identity.repositories import (
    EnrollmentRepository,
    IdentityRepository,
)
from escolar_identity.domain.identity.value_objects import (
    ClassifiedIdentifier,
    Email,
    IdentifierKind,
    IdentityRole,
    NationalId,
)

__all__ = [
    "AccountNotFoundError",
    "ClassifiedIdentifier",
    "Email",
    "EmailAlreadyExistsError",
    "EnrollmentRepository",
    "IdentifierExhaustedError",
    "IdentifierKind",
    "Identity",
    "IdentityConstraintError",
    "IdentityNotFoundError",
    "IdentityRepository",
    "IdentityRole",
    "InvalidEmailError",
    "InvalidNameError",
    "InvalidNationalIdError",
    "NationalId",
    "NationalIdAlreadyExistsError",
    "RegistrationNumberAlreadyExistsError",
    "TenantNotFoundError",
]
