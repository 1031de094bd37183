"""SQLAlchemy implementation of SchoolRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from escolar_identity.domain.school import School, SchoolRepository
from escolar_identity.domain.shared.time import ensure_tz_aware
from escolar_identity.infrastructure.persistence.sqlalchemy.models import SchoolModel

logger = logging.getLogger(__name__)


class SchoolRepositorySQLAlchemy(SchoolRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, school_id: UUID) -> Optional[School]:
        model = await self._find_model_by_id(school_id)
        if model is None:
            return None
        return School(
            id=model.id,
            name=model.name,
            email_domain=model.email_domain,
            created_at=ensure_tz_aware(model.created_at),
        )

    async def save(self, school: School) -> None:
        existing = await self._find_model_by_id(school.id)
        if existing:
            existing.name = school.name
            existing.email_domain = school.email_domain
        else:
            self._session.add(
                SchoolModel(
                    id=school.id,
                    name=school.name,
                    email_domain=school.email_domain,
                    created_at=school.created_at,
                ),
            )
            logger.info("Created school: %s (%s)", school.id, school.name)
        await self._session.flush()

    async def _find_model_by_id(self, school_id: UUID) -> SchoolModel | None:
        stmt = select(SchoolModel).where(SchoolModel.id == school_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
