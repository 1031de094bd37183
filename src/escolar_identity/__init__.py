"""Escolar Identity - credential provisioning and sign-in for schools.

This package handles:
- Identity management (profiles, roles, first-login gate)
- Synthesized logins (registration numbers, login handles, emails)
- Account provisioning with compensating rollback
- Login by email, national id or registration number
- Password policy and access tokens
"""

from escolar_identity.application.context import IdentityContext
from escolar_identity.application.dtos import (
    GeneratedCredential,
    LoginResolution,
    LoginResult,
    PasswordChangeResult,
    ProvisionErrorKind,
    ProvisionRequest,
    ProvisionResult,
)
from escolar_identity.application.ports import AuthProvider, AuthSession
from escolar_identity.application.services import (
    AccountProvisioner,
    AuthenticationService,
    LoginResolver,
    SessionPolicy,
)
from escolar_identity.domain.identity import (
    Identity,
    IdentityRepository,
    IdentityRole,
)
from escolar_identity.exceptions import (
    AuthError,
    AuthProviderUnavailableError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidTokenError,
    PermissionDeniedError,
    WeakPasswordError,
)
from escolar_identity.schemas import TokenPayload
from escolar_identity.services import JWTService, PasswordHashingService

__all__ = [
    # Domain
    "Identity",
    "IdentityRepository",
    "IdentityRole",
    # Exceptions
    "AuthError",
    "AuthProviderUnavailableError",
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "PermissionDeniedError",
    "WeakPasswordError",
    # Schemas
    "TokenPayload",
    # Services
    "JWTService",
    "PasswordHashingService",
    # Application
    "AccountProvisioner",
    "AuthProvider",
    "AuthSession",
    "AuthenticationService",
    "GeneratedCredential",
    "IdentityContext",
    "LoginResolution",
    "LoginResolver",
    "LoginResult",
    "PasswordChangeResult",
    "ProvisionErrorKind",
    "ProvisionRequest",
    "ProvisionResult",
    "SessionPolicy",
]
