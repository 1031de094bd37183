"""Unit tests for SupabaseAuthProvider against a mocked GoTrue API."""

import json

import httpx
import pytest

from escolar_identity.exceptions import (
    AuthProviderUnavailableError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from escolar_identity.infrastructure.auth import SupabaseAuthProvider

BASE_URL = "https://project.supabase.test"
SERVICE_KEY = "service-role-key"


class TestSupabaseAuthProvider:
    """Tests for the GoTrue admin REST adapter."""

    def setup_method(self):
        """Set up test fixtures."""
        self.requests: list[httpx.Request] = []
        self.responder = lambda request: httpx.Response(200, json={})

    def _provider(self) -> SupabaseAuthProvider:
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return self.responder(request)

        client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler),
            base_url=BASE_URL,
        )
        return SupabaseAuthProvider(
            base_url=BASE_URL,
            service_role_key=SERVICE_KEY,
            client=client,
        )

    @pytest.mark.asyncio
    async def test_create_identity_returns_user_id(self):
        """The created user's id is returned."""
        # Arrange
        self.responder = lambda request: httpx.Response(
            200,
            json={"id": "user-1", "email": "maria@example.com"},
        )
        provider = self._provider()

        # Act
        auth_user_id = await provider.create_identity(
            "maria@example.com",
            "Segura#2024",
            {"role": "teacher"},
            pre_confirmed=True,
        )

        # Assert
        assert auth_user_id == "user-1"
        request = self.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/auth/v1/admin/users"
        assert request.headers["apikey"] == SERVICE_KEY
        assert request.headers["Authorization"] == f"Bearer {SERVICE_KEY}"
        body = json.loads(request.content)
        assert body["email_confirm"] is True
        assert body["user_metadata"] == {"role": "teacher"}

    @pytest.mark.asyncio
    async def test_create_identity_with_taken_email(self):
        """A duplicate email maps to EmailAlreadyRegisteredError."""
        self.responder = lambda request: httpx.Response(
            422,
            json={"error_code": "email_exists", "msg": "already registered"},
        )

        with pytest.raises(EmailAlreadyRegisteredError):
            await self._provider().create_identity(
                "maria@example.com",
                "Segura#2024",
                {},
                pre_confirmed=True,
            )

    @pytest.mark.asyncio
    async def test_create_identity_with_legacy_duplicate_message(self):
        """Older GoTrue versions only say so in the message."""
        self.responder = lambda request: httpx.Response(
            422,
            json={"msg": "A user with this email address has already been registered"},
        )

        with pytest.raises(EmailAlreadyRegisteredError):
            await self._provider().create_identity("a@b.com", "Segura#2024", {}, True)

    @pytest.mark.asyncio
    async def test_server_error_is_unavailable(self):
        """Unexpected statuses mean the provider is unavailable."""
        self.responder = lambda request: httpx.Response(500, text="boom")

        with pytest.raises(AuthProviderUnavailableError):
            await self._provider().create_identity("a@b.com", "Segura#2024", {}, True)

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        """Timeouts mean the provider is unavailable."""

        def raise_timeout(request):
            raise httpx.ReadTimeout("timed out", request=request)

        self.responder = raise_timeout

        with pytest.raises(AuthProviderUnavailableError):
            await self._provider().verify_credentials("a@b.com", "Segura#2024")

    @pytest.mark.asyncio
    async def test_delete_missing_user_is_noop(self):
        """Deleting an account that is already gone succeeds."""
        self.responder = lambda request: httpx.Response(404, json={})

        await self._provider().delete_identity("user-1")

        assert self.requests[0].method == "DELETE"
        assert self.requests[0].url.path == "/auth/v1/admin/users/user-1"

    @pytest.mark.asyncio
    async def test_verify_credentials(self):
        """The password grant returns the user's session."""
        # Arrange
        self.responder = lambda request: httpx.Response(
            200,
            json={
                "access_token": "ignored",
                "user": {
                    "id": "user-1",
                    "email": "maria@example.com",
                    "user_metadata": {"role": "student"},
                },
            },
        )
        provider = self._provider()

        # Act
        session = await provider.verify_credentials("maria@example.com", "Segura#2024")

        # Assert
        assert session.auth_user_id == "user-1"
        assert session.metadata == {"role": "student"}
        assert self.requests[0].url.params["grant_type"] == "password"

    @pytest.mark.asyncio
    async def test_verify_wrong_password(self):
        """A rejected grant is an invalid credentials error."""
        self.responder = lambda request: httpx.Response(
            400,
            json={"error": "invalid_grant"},
        )

        with pytest.raises(InvalidCredentialsError):
            await self._provider().verify_credentials("a@b.com", "wrong")

    @pytest.mark.asyncio
    async def test_update_password(self):
        """The new password is sent to the admin endpoint."""
        await self._provider().update_password("user-1", "Nova#Senha1")

        request = self.requests[0]
        assert request.method == "PUT"
        assert json.loads(request.content) == {"password": "Nova#Senha1"}

    def test_requires_url_and_key(self):
        """Missing configuration fails fast."""
        with pytest.raises(ValueError):
            SupabaseAuthProvider(base_url="", service_role_key=SERVICE_KEY)
