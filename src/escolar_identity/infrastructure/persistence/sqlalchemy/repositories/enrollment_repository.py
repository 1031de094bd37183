"""SQLAlchemy implementation of EnrollmentRepository."""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from escolar_identity.domain.identity import (
    EnrollmentRepository,
    IdentityConstraintError,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.models import (
    EnrollmentModel,
)

logger = logging.getLogger(__name__)


class EnrollmentRepositorySQLAlchemy(EnrollmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def enroll(self, identity_id: UUID, class_id: UUID) -> None:
        try:
            async with self._session.begin_nested():
                self._session.add(
                    EnrollmentModel(identity_id=identity_id, class_id=class_id),
                )
                await self._session.flush()
        except IntegrityError as e:
            msg = "Student is already enrolled in this class"
            raise IdentityConstraintError(
                msg,
                details={"identity_id": str(identity_id), "class_id": str(class_id)},
            ) from e
        logger.debug("Enrolled %s in class %s", identity_id, class_id)

    async def list_class_ids(self, identity_id: UUID) -> list[UUID]:
        stmt = (
            select(EnrollmentModel.class_id)
            .where(EnrollmentModel.identity_id == identity_id)
            .order_by(EnrollmentModel.created_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
