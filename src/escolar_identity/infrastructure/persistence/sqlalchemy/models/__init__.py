"""SQLAlchemy models for the identity core."""

from escolar_identity.infrastructure.persistence.sqlalchemy.models.auth_account_model import (  # noqa: E501
    AuthAccountModel,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.models.enrollment_model import (  # noqa: E501
    EnrollmentModel,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.models.identity_model import (  # noqa: E501
    IdentityModel,
)
from escolar_identity.infrastructure.persistence.sqlalchemy.models.school_model import (  # noqa: E501
    SchoolModel,
)

__all__ = [
    "AuthAccountModel",
    "EnrollmentModel",
    "IdentityModel",
    "SchoolModel",
]
