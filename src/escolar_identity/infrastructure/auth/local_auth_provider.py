"""Auth provider backed by a local SQLAlchemy table and bcrypt hashes."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from escolar_identity.application.ports import AuthProvider, AuthSession
from escolar_identity.domain.shared.time import utc_now
from escolar_identity.exceptions import (
    AuthProviderUnavailableError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.models import (
    AuthAccountModel,
)
from escolar_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


class LocalAuthProvider(AuthProvider):
    """AuthProvider storing accounts in the ``auth_accounts`` table.

    Shares the request's session, so accounts and profiles commit together.
    """

    def __init__(
        self,
        session: AsyncSession,
        password_service: PasswordHashingService | None = None,
    ):
        self._session = session
        self._password_service = password_service or PasswordHashingService()

    async def create_identity(
        self,
        email: str,
        password: str,
        metadata: dict[str, Any],
        pre_confirmed: bool,
    ) -> str:
        normalized = email.strip().lower()
        if await self._find_by_email(normalized) is not None:
            raise EmailAlreadyRegisteredError(email)

        model = AuthAccountModel(
            email=email.strip(),
            email_normalized=normalized,
            password_hash=self._password_service.hash(password),
            user_metadata=dict(metadata),
            email_confirmed_at=utc_now() if pre_confirmed else None,
        )
        try:
            async with self._session.begin_nested():
                self._session.add(model)
                await self._session.flush()
        except IntegrityError as e:
            raise EmailAlreadyRegisteredError(email) from e

        logger.info("Created auth account %s", model.id)
        return model.id

    async def delete_identity(self, auth_user_id: str) -> None:
        model = await self._find_by_id(auth_user_id)
        if model is None:
            return
        await self._session.delete(model)
        await self._session.flush()
        logger.info("Deleted auth account %s", auth_user_id)

    async def verify_credentials(self, email: str, password: str) -> AuthSession:
        model = await self._find_by_email(email.strip().lower())
        if model is None:
            self._password_service.verify_placeholder(password)
            raise InvalidCredentialsError
        if not self._password_service.verify(password, model.password_hash):
            raise InvalidCredentialsError
        return AuthSession(
            auth_user_id=model.id,
            email=model.email,
            metadata=dict(model.user_metadata or {}),
        )

    async def update_password(self, auth_user_id: str, new_password: str) -> None:
        model = await self._find_by_id(auth_user_id)
        if model is None:
            msg = f"auth account {auth_user_id} does not exist"
            raise AuthProviderUnavailableError(msg)
        model.password_hash = self._password_service.hash(new_password)
        model.updated_at = utc_now()
        await self._session.flush()
        logger.debug("Updated password of auth account %s", auth_user_id)

    async def _find_by_email(self, normalized_email: str) -> AuthAccountModel | None:
        stmt = select(AuthAccountModel).where(
            AuthAccountModel.email_normalized == normalized_email,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find_by_id(self, auth_user_id: str) -> AuthAccountModel | None:
        stmt = select(AuthAccountModel).where(AuthAccountModel.id == auth_user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
