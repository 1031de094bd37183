from escolar_identity.domain.identity.repositories.enrollment_repository import (
    EnrollmentRepository,
)
from escolar_identity.domain.identity.repositories.identity_repository import (
    IdentityRepository,
)

__all__ = ["EnrollmentRepository", "IdentityRepository"]
