"""SQLAlchemy model for the Identity aggregate."""

from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from escolar_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)


class IdentityModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Identity aggregates.

    ``email_normalized`` holds the lowercased email and carries the unique
    constraint, so uniqueness and lookups are case-insensitive while
    ``email`` keeps the original spelling.
    """

    __tablename__ = "identities"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("schools.id", name="fk_identities_school"),
        nullable=False,
        index=True,
    )
    auth_user_id: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    email_normalized: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    national_id: Mapped[str | None] = mapped_column(
        String(11),
        unique=True,
        nullable=True,
    )
    registration_number: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        nullable=True,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    first_login: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<IdentityModel(id={self.id}, email={self.email}, role={self.role})>"
