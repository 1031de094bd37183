"""SQLAlchemy persistence for the identity core."""

from escolar_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.repositories import (
    EnrollmentRepositorySQLAlchemy,
    IdentityRepositorySQLAlchemy,
    SchoolRepositorySQLAlchemy,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.transaction import (
    session_committer,
)

__all__ = [
    "Base",
    "EnrollmentRepositorySQLAlchemy",
    "IdentityRepositorySQLAlchemy",
    "SchoolRepositorySQLAlchemy",
    "TimestampMixin",
    "create_tables",
    "drop_tables",
    "session_committer",
]
