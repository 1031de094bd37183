"""Value objects for the identity domain."""

from escolar_identity.domain.identity.value_objects.email import Email
from escolar_identity.domain.identity.value_objects.identifier_kind import (
    ClassifiedIdentifier,
    IdentifierKind,
)
from escolar_identity.domain.identity.value_objects.identity_role import IdentityRole
from escolar_identity.domain.identity.value_objects.national_id import (
    NATIONAL_ID_LENGTH,
    NationalId,
)

__all__ = [
    "NATIONAL_ID_LENGTH",
    "ClassifiedIdentifier",
    "Email",
    "IdentifierKind",
    "IdentityRole",
    "NationalId",
]
