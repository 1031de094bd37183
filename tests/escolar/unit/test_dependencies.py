"""Tests for the shared API dependencies."""

import pytest
from pydantic import SecretStr

from escolar.presentation.api import dependencies
from escolar.presentation.api.dependencies import (
    close_auth_providers,
    get_supabase_auth_provider,
)
from escolar_config.settings import Settings


@pytest.fixture
def supabase_settings(monkeypatch) -> Settings:
    settings = Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        auth_backend="supabase",
        supabase_url="https://escola.supabase.co",
        supabase_service_role_key=SecretStr("service-role-key"),
    )
    monkeypatch.setattr(dependencies, "get_settings", lambda: settings)
    get_supabase_auth_provider.cache_clear()
    yield settings
    get_supabase_auth_provider.cache_clear()


class TestCloseAuthProviders:
    """Shutdown of the shared Supabase provider."""

    async def test_closes_the_http_client(self, supabase_settings):
        # Arrange
        provider = get_supabase_auth_provider()
        client = await provider._get_client()

        # Act
        await close_auth_providers()

        # Assert
        assert client.is_closed
        assert provider._client is None
        assert get_supabase_auth_provider.cache_info().currsize == 0

    async def test_next_lookup_builds_a_fresh_provider(self, supabase_settings):
        # Arrange
        first = get_supabase_auth_provider()
        await close_auth_providers()

        # Act
        second = get_supabase_auth_provider()

        # Assert
        assert second is not first

    async def test_noop_when_never_created(self, supabase_settings):
        await close_auth_providers()

        assert get_supabase_auth_provider.cache_info().currsize == 0
