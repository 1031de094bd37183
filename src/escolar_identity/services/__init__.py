"""Identity services - JWT and password hashing."""

from escolar_identity.services.jwt_service import JWTService
from escolar_identity.services.password_service import PasswordHashingService

__all__ = [
    "JWTService",
    "PasswordHashingService",
]
