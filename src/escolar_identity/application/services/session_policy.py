"""First-login gate and forced password change."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from escolar_identity.application.dtos import PasswordChangeResult
from escolar_identity.domain.identity import IdentityNotFoundError
from escolar_identity.domain.identity.services import (
    ACCEPTABLE_STRENGTH,
    password_strength,
)
from escolar_identity.domain.shared import ErrorCode
from escolar_identity.exceptions import (
    AuthProviderUnavailableError,
    WeakPasswordError,
)
from escolar_identity.services import PasswordHashingService

if TYPE_CHECKING:
    from escolar_identity.application.ports import AuthProvider
    from escolar_identity.domain.identity import IdentityRepository

DEFAULT_MIN_LENGTH = 8


class SessionPolicy:
    """
    Tracks whether an identity must change its password before using the
    system, and performs that change.

    ``complete_password_change`` does not re-authenticate: callers must have
    verified the current password with the auth provider first.
    """

    def __init__(  # noqa: PLR0913
        self,
        identity_repository: IdentityRepository,
        auth_provider: AuthProvider,
        min_length: int = DEFAULT_MIN_LENGTH,
        min_strength: float = ACCEPTABLE_STRENGTH,
        logger: logging.Logger | None = None,
    ):
        self._identity_repo = identity_repository
        self._auth_provider = auth_provider
        self._min_length = min_length
        self._min_strength = min_strength
        self._logger = logger or logging.getLogger(__name__)

    async def is_first_login(self, identity_id: UUID) -> bool:
        """Return the first-login flag, ``False`` for unknown identities."""
        identity = await self._identity_repo.find_by_id(identity_id)
        if identity is None:
            self._logger.debug("First-login check for unknown identity %s", identity_id)
            return False
        return identity.is_first_login

    async def complete_password_change(
        self,
        identity_id: UUID,
        new_password: str,
        min_strength: float | None = None,
        confirm_password: str | None = None,
    ) -> PasswordChangeResult:
        """Validate and store a new password, then clear the first-login flag.

        Returns
        -------
        A failed result for a rejected password, an unknown identity or an
        auth provider failure; the flag stays untouched in that case.
        """
        strength = password_strength(new_password)
        rejection = self.validate_new_password(
            new_password,
            min_strength=min_strength,
            confirm_password=confirm_password,
        )
        if rejection is not None:
            return PasswordChangeResult(
                success=False,
                strength=strength,
                error=rejection,
            )

        identity = await self._identity_repo.find_by_id(identity_id)
        if identity is None or identity.auth_user_id is None:
            return PasswordChangeResult(
                success=False,
                strength=strength,
                error=IdentityNotFoundError(str(identity_id)),
            )

        try:
            await self._auth_provider.update_password(
                identity.auth_user_id,
                new_password,
            )
        except (AuthProviderUnavailableError, WeakPasswordError) as e:
            self._logger.error("Password change failed for %s: %r", identity_id, e)
            return PasswordChangeResult(success=False, strength=strength, error=e)

        identity.complete_first_login()
        await self._identity_repo.save(identity)

        self._logger.info("Password changed for identity %s", identity_id)
        return PasswordChangeResult(success=True, strength=strength)

    def validate_new_password(
        self,
        new_password: str,
        min_strength: float | None = None,
        confirm_password: str | None = None,
    ) -> WeakPasswordError | None:
        """Return why ``new_password`` is not acceptable, or ``None``.

        Length is checked first, then the byte limit of the hash, then
        strength and finally the confirmation.
        """
        threshold = self._min_strength if min_strength is None else min_strength
        password = new_password or ""

        if len(password) < self._min_length:
            return WeakPasswordError(
                f"Password must be at least {self._min_length} characters",
                ErrorCode.PASSWORD_TOO_SHORT,
            )
        if len(password.encode("utf-8")) > PasswordHashingService.MAX_LENGTH:
            return WeakPasswordError(
                f"Password cannot exceed {PasswordHashingService.MAX_LENGTH} bytes",
                ErrorCode.PASSWORD_TOO_LONG,
            )
        if password_strength(password) < threshold:
            return WeakPasswordError(
                "Password is too weak. Mix upper and lower case letters, "
                "digits and symbols.",
                ErrorCode.PASSWORD_TOO_WEAK,
            )
        if confirm_password is not None and confirm_password != password:
            return WeakPasswordError(
                "Passwords do not match",
                ErrorCode.PASSWORD_MISMATCH,
            )
        return None
