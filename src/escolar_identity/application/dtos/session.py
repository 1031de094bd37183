"""DTOs for login resolution and password changes."""

from dataclasses import dataclass
from typing import Optional

from escolar_identity.domain.identity import IdentifierKind, Identity
from escolar_identity.domain.shared import DomainException


@dataclass(frozen=True)
class LoginResolution:
    """Email resolved from a login identifier, or why it could not be."""

    success: bool
    kind: IdentifierKind
    email: Optional[str] = None
    error: Optional[DomainException] = None


@dataclass(frozen=True)
class PasswordChangeResult:
    """Outcome of a forced or voluntary password change."""

    success: bool
    error: Optional[DomainException] = None
    strength: float = 0.0


@dataclass(frozen=True)
class LoginResult:
    """Successful sign-in: the identity plus its access token."""

    identity: Identity
    access_token: str
    expires_in: int

    @property
    def must_change_password(self) -> bool:
        return self.identity.is_first_login
