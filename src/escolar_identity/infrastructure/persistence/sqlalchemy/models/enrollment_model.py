"""SQLAlchemy model for student enrollments in classes."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from escolar_identity.domain.shared.time import utc_now
from escolar_identity.infrastructure.persistence.sqlalchemy.base import Base


class EnrollmentModel(Base):
    """Student ↔ class association. Classes are managed elsewhere."""

    __tablename__ = "student_enrollments"
    __table_args__ = (
        UniqueConstraint(
            "identity_id",
            "class_id",
            name="uq_student_enrollments_identity_class",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    identity_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("identities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    class_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
