"""Integration tests for LocalAuthProvider."""

import pytest

from escolar_identity.exceptions import (
    AuthProviderUnavailableError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from escolar_identity.infrastructure.auth import LocalAuthProvider
from escolar_identity.services import PasswordHashingService

pytestmark = pytest.mark.integration

TEST_PASSWORD = "Segura#2024"


@pytest.fixture
def provider(session) -> LocalAuthProvider:
    return LocalAuthProvider(
        session,
        password_service=PasswordHashingService(rounds=4),
    )


class TestLocalAuthProvider:
    """Tests for the table-backed auth provider."""

    async def test_create_and_verify(self, provider):
        """A created account verifies with its password."""
        # Act
        auth_user_id = await provider.create_identity(
            "Maria@Example.com",
            TEST_PASSWORD,
            {"role": "teacher"},
            pre_confirmed=True,
        )
        session = await provider.verify_credentials(
            "maria@example.com",
            TEST_PASSWORD,
        )

        # Assert
        assert session.auth_user_id == auth_user_id
        assert session.email == "Maria@Example.com"
        assert session.metadata == {"role": "teacher"}

    async def test_duplicate_email_ignores_case(self, provider):
        """One account per email, whatever the spelling."""
        await provider.create_identity("maria@example.com", TEST_PASSWORD, {}, True)

        with pytest.raises(EmailAlreadyRegisteredError):
            await provider.create_identity(
                "MARIA@example.com",
                TEST_PASSWORD,
                {},
                True,
            )

    async def test_wrong_password(self, provider):
        """A wrong password is rejected."""
        await provider.create_identity("maria@example.com", TEST_PASSWORD, {}, True)

        with pytest.raises(InvalidCredentialsError):
            await provider.verify_credentials("maria@example.com", "wrong-pass")

    async def test_unknown_email(self, provider):
        """An unknown email is rejected like a wrong password."""
        with pytest.raises(InvalidCredentialsError):
            await provider.verify_credentials("nobody@example.com", TEST_PASSWORD)

    async def test_unknown_email_spends_a_hash_check(self, session, monkeypatch):
        """Unknown accounts run bcrypt too, so timing does not tell them apart."""
        # Arrange
        password_service = PasswordHashingService(rounds=4)
        checked = []
        monkeypatch.setattr(
            password_service,
            "verify",
            lambda password, password_hash: checked.append(password_hash) or False,
        )
        provider = LocalAuthProvider(session, password_service=password_service)

        # Act
        with pytest.raises(InvalidCredentialsError):
            await provider.verify_credentials("nobody@example.com", TEST_PASSWORD)

        # Assert
        assert len(checked) == 1
        assert checked[0].startswith("$2b$04$")

    async def test_delete_is_idempotent(self, provider):
        """Deleting twice is fine and the account is gone."""
        auth_user_id = await provider.create_identity(
            "maria@example.com",
            TEST_PASSWORD,
            {},
            True,
        )

        await provider.delete_identity(auth_user_id)
        await provider.delete_identity(auth_user_id)

        with pytest.raises(InvalidCredentialsError):
            await provider.verify_credentials("maria@example.com", TEST_PASSWORD)

    async def test_update_password(self, provider):
        """Only the new password works after an update."""
        auth_user_id = await provider.create_identity(
            "maria@example.com",
            TEST_PASSWORD,
            {},
            True,
        )

        await provider.update_password(auth_user_id, "Nova#Senha1")

        await provider.verify_credentials("maria@example.com", "Nova#Senha1")
        with pytest.raises(InvalidCredentialsError):
            await provider.verify_credentials("maria@example.com", TEST_PASSWORD)

    async def test_update_password_of_missing_account(self, provider):
        """Updating a missing account is a provider failure."""
        with pytest.raises(AuthProviderUnavailableError):
            await provider.update_password("missing", "Nova#Senha1")
