"""DTOs for account provisioning and credential resets."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional
from uuid import UUID

from escolar_identity.domain.identity import IdentityRole
from escolar_identity.domain.shared import DomainException


@dataclass(frozen=True)
class ProvisionRequest:
    """Input for provisioning one identity.

    Without ``email`` a login is synthesized: students get a registration
    number, everybody else a login handle.
    """

    full_name: str
    role: IdentityRole
    tenant_id: UUID
    email: Optional[str] = None
    national_id: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    class_id: Optional[UUID] = None
    provisioned_by: Optional[UUID] = None
    # Chosen by the account holder at self-registration; generated otherwise
    password: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class GeneratedCredential:
    """Plaintext credential handed out exactly once. Never persisted."""

    identity_id: UUID
    login: str
    password: str
    synthesized_email: Optional[str] = None
    registration_number: Optional[str] = None

    def __repr__(self) -> str:
        return (
            f"GeneratedCredential(identity_id={self.identity_id}, "
            f"login={self.login!r}, password='***')"
        )


class ProvisionErrorKind(str, Enum):
    DUPLICATE_EMAIL = "duplicate_email"
    EXHAUSTED = "exhausted"
    CONSTRAINT_VIOLATION = "constraint_violation"
    INVALID_INPUT = "invalid_input"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ProvisionResult:
    """Result of ``AccountProvisioner.provision`` or ``reset_password``."""

    success: bool
    credential: Optional[GeneratedCredential] = None
    error_kind: Optional[ProvisionErrorKind] = None
    error: Optional[DomainException] = None

    @classmethod
    def ok(cls, credential: GeneratedCredential) -> "ProvisionResult":
        return cls(success=True, credential=credential)

    @classmethod
    def fail(
        cls,
        kind: ProvisionErrorKind,
        error: DomainException,
    ) -> "ProvisionResult":
        return cls(success=False, error_kind=kind, error=error)
