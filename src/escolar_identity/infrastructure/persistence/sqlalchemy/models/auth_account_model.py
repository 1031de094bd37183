"""SQLAlchemy model for accounts of the local auth provider."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from escolar_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)


class AuthAccountModel(Base, TimestampMixin):
    """Email/password account owned by ``LocalAuthProvider``."""

    __tablename__ = "auth_accounts"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    email_normalized: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # "metadata" is reserved by the declarative base
    user_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON,
        default=dict,
        nullable=False,
    )
    email_confirmed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<AuthAccountModel(id={self.id}, email={self.email})>"
