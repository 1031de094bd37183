"""SQLAlchemy model for schools (tenants)."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from escolar_identity.domain.shared.time import utc_now
from escolar_identity.infrastructure.persistence.sqlalchemy.base import Base


class SchoolModel(Base):
    __tablename__ = "schools"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email_domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<SchoolModel(id={self.id}, name={self.name})>"
