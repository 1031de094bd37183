"""SQLAlchemy repositories for the identity core."""

from escolar_identity.infrastructure.persistence.sqlalchemy.repositories.enrollment_repository import (  # noqa: E501
    EnrollmentRepositorySQLAlchemy,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.repositories.identity_repository import (  # noqa: E501
    IdentityRepositorySQLAlchemy,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.repositories.school_repository import (  # noqa: E501
    SchoolRepositorySQLAlchemy,
)

__all__ = [
    "EnrollmentRepositorySQLAlchemy",
    "IdentityRepositorySQLAlchemy",
    "SchoolRepositorySQLAlchemy",
]
