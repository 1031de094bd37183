"""Auth provider backed by the hosted Supabase (GoTrue) admin API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field

from escolar_identity.application.ports import AuthProvider, AuthSession
from escolar_identity.exceptions import (
    AuthProviderUnavailableError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)

logger = logging.getLogger(__name__)

_DUPLICATE_EMAIL_CODES = {"email_exists", "user_already_exists"}
_DUPLICATE_EMAIL_TEXT = "already been registered"


class AdminUserCreate(BaseModel):
    email: str
    password: str
    email_confirm: bool
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class GoTrueUser(BaseModel):
    id: str
    email: str = ""
    user_metadata: dict[str, Any] = Field(default_factory=dict)


class PasswordGrantResponse(BaseModel):
    user: GoTrueUser


class SupabaseAuthProvider(AuthProvider):
    """AuthProvider calling the GoTrue admin REST API with the service key.

    The service role key never leaves the server; clients only talk to the
    escolar API.
    """

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        if not base_url or not service_role_key:
            msg = "Supabase URL and service role key are required"
            raise ValueError(msg)
        self._base_url = base_url.rstrip("/")
        self._service_role_key = service_role_key
        self._timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers(),
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {self._service_role_key}",
            "Content-Type": "application/json",
        }

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def create_identity(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
        pre_confirmed: bool,
    ) -> str:
        body = AdminUserCreate(
            email=email,
            password=password,
            email_confirm=pre_confirmed,
            user_metadata=metadata,
        )
        response = await self._request(
            "POST",
            "/auth/v1/admin/users",
            json=body.model_dump(),
        )
        if response.status_code in (400, 409, 422) and _is_duplicate_email(response):
            raise EmailAlreadyRegisteredError(email)
        self._raise_for_status(response, "create user")

        user = GoTrueUser.model_validate(response.json())
        logger.info("Created Supabase auth user %s", user.id)
        return user.id

    async def delete_identity(self, auth_user_id: str) -> None:
        response = await self._request("DELETE", f"/auth/v1/admin/users/{auth_user_id}")
        if response.status_code == 404:
            return
        self._raise_for_status(response, "delete user")
        logger.info("Deleted Supabase auth user %s", auth_user_id)

    async def verify_credentials(self, email: str, password: str) -> AuthSession:
        response = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code in (400, 401):
            raise InvalidCredentialsError
        self._raise_for_status(response, "password grant")

        grant = PasswordGrantResponse.model_validate(response.json())
        return AuthSession(
            auth_user_id=grant.user.id,
            email=grant.user.email or email,
            metadata=grant.user.user_metadata,
        )

    async def update_password(self, auth_user_id: str, new_password: str) -> None:
        response = await self._request(
            "PUT",
            f"/auth/v1/admin/users/{auth_user_id}",
            json={"password": new_password},
        )
        self._raise_for_status(response, "update password")
        logger.debug("Updated password of Supabase auth user %s", auth_user_id)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        try:
            return await client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as e:
            logger.warning("Supabase auth timeout on %s %s: %s", method, url, e)
            raise AuthProviderUnavailableError(str(e)) from e
        except httpx.HTTPError as e:
            logger.warning("Supabase auth connection failed on %s %s: %s", method, url, e)
            raise AuthProviderUnavailableError(str(e)) from e

    def _raise_for_status(self, response: httpx.Response, action: str) -> None:
        if response.is_success:
            return
        detail = response.text[:200] if response.text else "no body"
        logger.error(
            "Supabase auth %s returned %d: %s",
            action,
            response.status_code,
            detail,
        )
        raise AuthProviderUnavailableError(f"{action}: HTTP {response.status_code}")


def _is_duplicate_email(response: httpx.Response) -> bool:
    try:
        payload = response.json()
    except ValueError:
        return _DUPLICATE_EMAIL_TEXT in response.text
    if not isinstance(payload, dict):
        return False
    if payload.get("error_code") in _DUPLICATE_EMAIL_CODES:
        return True
    message = str(payload.get("msg") or payload.get("message") or "")
    return _DUPLICATE_EMAIL_TEXT in message.lower()
