"""SQLAlchemy implementation of IdentityRepository."""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from escolar_identity.domain.identity import (
    Email,
    EmailAlreadyExistsError,
    Identity,
    IdentityConstraintError,
    IdentityRepository,
    NationalIdAlreadyExistsError,
    RegistrationNumberAlreadyExistsError,
)
from escolar_identity.domain.shared.time import ensure_tz_aware
from escolar_identity.infrastructure.persistence.sqlalchemy.models import (
    IdentityModel,
)

logger = logging.getLogger(__name__)


class IdentityRepositorySQLAlchemy(IdentityRepository):
    """SQLAlchemy implementation of the IdentityRepository interface.

    Writes run inside a SAVEPOINT so a constraint violation leaves the
    surrounding transaction usable.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, identity_id: UUID) -> Optional[Identity]:
        model = await self._find_model_by_id(identity_id)
        return self._map_to_domain(model) if model else None

    async def find_by_auth_user_id(self, auth_user_id: str) -> Optional[Identity]:
        stmt = select(IdentityModel).where(IdentityModel.auth_user_id == auth_user_id)
        return await self._find_one(stmt)

    async def find_by_email(self, email: Union[str, Email]) -> Optional[Identity]:
        email_value = email.value if isinstance(email, Email) else email
        stmt = select(IdentityModel).where(
            IdentityModel.email_normalized == email_value.strip().lower(),
        )
        return await self._find_one(stmt)

    async def find_by_national_id(self, national_id: str) -> Optional[Identity]:
        stmt = select(IdentityModel).where(IdentityModel.national_id == national_id)
        return await self._find_one(stmt)

    async def find_by_registration_number(
        self,
        registration_number: str,
    ) -> Optional[Identity]:
        stmt = select(IdentityModel).where(
            IdentityModel.registration_number == registration_number,
        )
        return await self._find_one(stmt)

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        identity = await self.find_by_email(email)
        return identity is not None

    async def exists_by_registration_number(self, registration_number: str) -> bool:
        stmt = select(IdentityModel.id).where(
            IdentityModel.registration_number == registration_number,
        )
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def save(self, identity: Identity) -> None:
        existing = await self._find_model_by_id(identity.id)

        try:
            async with self._session.begin_nested():
                if existing:
                    self._update_model(existing, identity)
                    logger.debug("Updated identity: %s", identity.id)
                else:
                    self._session.add(self._map_to_model(identity))
                await self._session.flush()
        except IntegrityError as e:
            raise self._map_integrity_error(identity, e) from e

        if not existing:
            logger.info(
                "Created identity: %s (role: %s)",
                identity.id,
                identity.role.value,
            )

    async def list_by_tenant(self, tenant_id: UUID) -> list[Identity]:
        stmt = (
            select(IdentityModel)
            .where(IdentityModel.tenant_id == tenant_id)
            .order_by(IdentityModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_one(self, stmt) -> Optional[Identity]:
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def _find_model_by_id(self, identity_id: UUID) -> IdentityModel | None:
        stmt = select(IdentityModel).where(IdentityModel.id == identity_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_integrity_error(
        self,
        identity: Identity,
        error: IntegrityError,
    ) -> IdentityConstraintError:
        # Postgres reports the constraint name, SQLite the table.column
        message = str(error.orig).lower()
        if "registration_number" in message:
            return RegistrationNumberAlreadyExistsError(
                identity.registration_number or "",
            )
        if "national_id" in message:
            return NationalIdAlreadyExistsError()
        if "email" in message:
            return EmailAlreadyExistsError(identity.email)
        logger.warning("Identity %s violated a constraint: %s", identity.id, message)
        return IdentityConstraintError(details={"error": message})

    def _map_to_domain(self, model: IdentityModel) -> Identity:
        return Identity.reconstitute(
            id=model.id,
            tenant_id=model.tenant_id,
            auth_user_id=model.auth_user_id,
            full_name=model.full_name,
            email=model.email,
            role=model.role,
            national_id=model.national_id,
            registration_number=model.registration_number,
            phone=model.phone,
            address=model.address,
            birth_date=model.birth_date,
            active=model.active,
            first_login=model.first_login,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, identity: Identity) -> IdentityModel:
        return IdentityModel(
            id=identity.id,
            tenant_id=identity.tenant_id,
            auth_user_id=identity.auth_user_id,
            full_name=identity.full_name,
            email=identity.email,
            email_normalized=identity.email.lower(),
            national_id=identity.national_id,
            registration_number=identity.registration_number,
            role=identity.role.value,
            phone=identity.phone,
            address=identity.address,
            birth_date=identity.birth_date,
            active=identity.is_active,
            first_login=identity.is_first_login,
            created_at=identity.created_at,
            updated_at=identity.updated_at,
        )

    def _update_model(self, model: IdentityModel, identity: Identity) -> None:
        # Role and tenant are immutable
        model.auth_user_id = identity.auth_user_id
        model.full_name = identity.full_name
        model.email = identity.email
        model.email_normalized = identity.email.lower()
        model.national_id = identity.national_id
        model.registration_number = identity.registration_number
        model.phone = identity.phone
        model.address = identity.address
        model.birth_date = identity.birth_date
        model.active = identity.is_active
        model.first_login = identity.is_first_login
        model.updated_at = identity.updated_at
