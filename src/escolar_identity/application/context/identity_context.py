"""Request-scoped context of the authenticated identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from escolar_identity.domain.identity import IdentityRole

if TYPE_CHECKING:
    from escolar_identity.domain.identity import Identity


@dataclass(frozen=True)
class IdentityContext:
    """Immutable context for the current authenticated identity."""

    identity_id: UUID
    tenant_id: UUID
    email: str
    role: IdentityRole

    @property
    def is_staff(self) -> bool:
        return self.role.is_staff

    @property
    def is_admin(self) -> bool:
        return self.role == IdentityRole.ADMIN

    def can_provision(self, role: IdentityRole) -> bool:
        """Staff provision teachers and students; only admins provision staff."""
        if role.is_staff:
            return self.is_admin
        return self.is_staff

    @classmethod
    def create(cls, identity: Identity) -> IdentityContext:
        return cls(
            identity_id=identity.id,
            tenant_id=identity.tenant_id,
            email=identity.email,
            role=identity.role,
        )

    def __str__(self) -> str:
        return f"IdentityContext({self.email})"
