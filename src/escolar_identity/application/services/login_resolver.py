"""Resolve any login identifier to the email the auth provider knows."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from escolar_identity.application.dtos import LoginResolution
from escolar_identity.domain.identity import AccountNotFoundError, IdentifierKind
from escolar_identity.domain.identity.services import classify, digits_only
from escolar_identity.domain.identity.value_objects import NATIONAL_ID_LENGTH

if TYPE_CHECKING:
    from escolar_identity.domain.identity import IdentityRepository

EmailLookup = Callable[[IdentifierKind, str], Awaitable[Optional[str]]]


class LoginResolver:
    """Turn an email, national id or registration number into a login email.

    Parameters
    ----------
    identity_repository
        Backs the default lookup (by national id or registration number)
    logger
        Defaults to the module logger
    """

    def __init__(
        self,
        identity_repository: IdentityRepository | None = None,
        logger: logging.Logger | None = None,
    ):
        self._identity_repo = identity_repository
        self._logger = logger or logging.getLogger(__name__)

    async def resolve_login_email(
        self,
        identifier: str,
        lookup: EmailLookup | None = None,
    ) -> LoginResolution:
        """Resolve ``identifier`` to an email.

        An email is returned unchanged without calling ``lookup``. Unknown
        identifiers are looked up as a national id when they hold exactly 11
        digits and as a registration number otherwise.
        """
        classified = classify(identifier)
        if classified.kind == IdentifierKind.EMAIL:
            return LoginResolution(
                success=True,
                kind=classified.kind,
                email=classified.value,
            )

        kind, value = classified.kind, classified.value
        if kind == IdentifierKind.UNKNOWN:
            if len(digits_only(value)) == NATIONAL_ID_LENGTH:
                kind, value = IdentifierKind.NATIONAL_ID, digits_only(value)
            else:
                kind = IdentifierKind.REGISTRATION_NUMBER

        lookup = lookup or self._lookup_email
        email = await lookup(kind, value) if value else None
        if email is None:
            self._logger.debug("No account for %s identifier", kind.value)
            return LoginResolution(
                success=False,
                kind=kind,
                error=AccountNotFoundError(value),
            )

        return LoginResolution(success=True, kind=kind, email=email)

    async def _lookup_email(self, kind: IdentifierKind, value: str) -> Optional[str]:
        if self._identity_repo is None:
            msg = "LoginResolver needs an identity repository or a lookup"
            raise RuntimeError(msg)

        if kind == IdentifierKind.NATIONAL_ID:
            identity = await self._identity_repo.find_by_national_id(value)
        else:
            identity = await self._identity_repo.find_by_registration_number(value)
        return identity.email if identity else None
