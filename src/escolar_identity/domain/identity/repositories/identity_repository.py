"""Identity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from escolar_identity.domain.identity.aggregates.identity import Identity
from escolar_identity.domain.identity.value_objects import Email


class IdentityRepository(ABC):
    """Repository interface for Identity aggregates."""

    @abstractmethod
    async def find_by_id(self, identity_id: UUID) -> Optional[Identity]:
        """Find an identity by its internal ID."""

    @abstractmethod
    async def find_by_auth_user_id(self, auth_user_id: str) -> Optional[Identity]:
        """Find the identity linked to an auth-provider account."""

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[Identity]:
        """Find an identity by email (case-insensitive)."""

    @abstractmethod
    async def find_by_national_id(self, national_id: str) -> Optional[Identity]:
        """Find an identity by its 11-digit national id."""

    @abstractmethod
    async def find_by_registration_number(
        self,
        registration_number: str,
    ) -> Optional[Identity]:
        """Find an identity by its registration number."""

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """Check if an identity exists with the given email."""

    @abstractmethod
    async def exists_by_registration_number(self, registration_number: str) -> bool:
        """Check if an identity exists with the given registration number."""

    @abstractmethod
    async def save(self, identity: Identity) -> None:
        """Insert or update an identity.

        Raises
        ------
        EmailAlreadyExistsError
            Another identity already uses the email
        RegistrationNumberAlreadyExistsError
            Another identity already uses the registration number
        NationalIdAlreadyExistsError
            Another identity already uses the national id
        IdentityConstraintError
            Any other constraint violation (e.g. unknown school)
        """

    @abstractmethod
    async def list_by_tenant(self, tenant_id: UUID) -> list[Identity]:
        """List all identities of a school, oldest first."""
