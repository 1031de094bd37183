"""Authentication service: sign-in by any login identifier."""

from __future__ import annotations

import logging
from contextlib import suppress
from typing import TYPE_CHECKING, NoReturn

from escolar_identity.application.dtos import LoginResult
from escolar_identity.application.services.login_resolver import LoginResolver
from escolar_identity.exceptions import InvalidCredentialsError, InvalidTokenError

# Never resolvable (RFC 2606), checked instead of a missing account
UNRESOLVED_LOGIN_EMAIL = "unresolved-login@escolar.invalid"

if TYPE_CHECKING:
    from escolar_identity.application.ports import AuthProvider
    from escolar_identity.domain.identity import Identity, IdentityRepository
    from escolar_identity.schemas import TokenPayload
    from escolar_identity.services import JWTService


class AuthenticationService:
    """
    Application service for sign-in.

    Bridges the login resolver, the auth provider and the JWT service:
    - Login with email, national id or registration number
    - Verification of the current password before a change
    - Access token verification

    Unknown accounts, wrong passwords and inactive accounts all fail with
    the same ``InvalidCredentialsError`` so callers cannot tell which
    identifiers exist.
    """

    def __init__(
        self,
        identity_repository: IdentityRepository,
        auth_provider: AuthProvider,
        jwt_service: JWTService,
        login_resolver: LoginResolver | None = None,
        logger: logging.Logger | None = None,
    ):
        self._identity_repo = identity_repository
        self._auth_provider = auth_provider
        self._jwt_service = jwt_service
        self._logger = logger or logging.getLogger(__name__)
        self._login_resolver = login_resolver or LoginResolver(
            identity_repository,
            logger=self._logger,
        )

    async def login(self, identifier: str, password: str) -> LoginResult:
        resolution = await self._login_resolver.resolve_login_email(identifier)
        if not resolution.success:
            self._logger.debug("Login attempt for unknown %s", resolution.kind.value)
            await self._reject_unresolved(password)

        session = await self._auth_provider.verify_credentials(
            resolution.email,
            password,
        )

        identity = await self._identity_repo.find_by_auth_user_id(session.auth_user_id)
        if identity is None:
            identity = await self._identity_repo.find_by_email(session.email)
        if identity is None:
            self._logger.warning(
                "Auth account %s has no identity profile",
                session.auth_user_id,
            )
            raise InvalidCredentialsError

        if not identity.is_active:
            self._logger.info("Login refused for inactive identity %s", identity.id)
            raise InvalidCredentialsError

        access_token = self._jwt_service.create_access_token(identity)
        self._logger.info("Identity logged in: %s", identity.id)
        return LoginResult(
            identity=identity,
            access_token=access_token,
            expires_in=int(self._jwt_service.access_token_lifetime.total_seconds()),
        )

    async def verify_current_password(self, identity: Identity, password: str) -> None:
        """Prove possession of the current password.

        Raises
        ------
        InvalidCredentialsError
            If the password is wrong
        """
        try:
            await self._auth_provider.verify_credentials(identity.email, password)
        except InvalidCredentialsError as e:
            msg = "Current password is incorrect"
            raise InvalidCredentialsError(msg) from e

    async def identity_for_token(self, token: str) -> Identity:
        """Return the active identity behind an access token.

        Raises
        ------
        InvalidTokenError
            If the token is invalid or its identity is gone or inactive
        """
        payload = self.verify_token(token)
        identity = await self._identity_repo.find_by_id(payload.identity_id)
        if identity is None or not identity.is_active:
            msg = "Identity not found"
            raise InvalidTokenError(msg)
        return identity

    def verify_token(self, token: str) -> TokenPayload:
        return self._jwt_service.verify_token(token)

    async def _reject_unresolved(self, password: str) -> NoReturn:
        # Same provider round trip as a wrong password
        with suppress(InvalidCredentialsError):
            await self._auth_provider.verify_credentials(
                UNRESOLVED_LOGIN_EMAIL,
                password,
            )
        raise InvalidCredentialsError
