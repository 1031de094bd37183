"""Auth provider port for the application layer.

This abstracts the external authentication system (a local credential
table or a hosted auth service). The identity core only depends on this
interface and never holds the provider's privileged credential itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AuthSession:
    """Result of a successful credential check."""

    auth_user_id: str
    email: str
    metadata: dict[str, Any] = field(default_factory=dict)


class AuthProvider(ABC):
    """Port for the external authentication provider."""

    @abstractmethod
    async def create_identity(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
        pre_confirmed: bool,
    ) -> str:
        """Create an auth account and return its provider id.

        Raises
        ------
        EmailAlreadyRegisteredError
            If the email already has an account (case-insensitive)
        AuthProviderUnavailableError
            If the provider cannot be reached
        """

    @abstractmethod
    async def delete_identity(self, auth_user_id: str) -> None:
        """Delete an auth account. Deleting a missing account is a no-op.

        Raises
        ------
        AuthProviderUnavailableError
            If the provider cannot be reached
        """

    @abstractmethod
    async def verify_credentials(self, email: str, password: str) -> AuthSession:
        """Check an email/password pair.

        Raises
        ------
        InvalidCredentialsError
            If no account matches or the password is wrong
        AuthProviderUnavailableError
            If the provider cannot be reached
        """

    @abstractmethod
    async def update_password(self, auth_user_id: str, new_password: str) -> None:
        """Replace the password of an auth account.

        Raises
        ------
        AuthProviderUnavailableError
            If the provider cannot be reached or the account is missing
        """
