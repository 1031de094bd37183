"""Data transfer objects of the identity application layer."""

from escolar_identity.application.dtos.provisioning import (
    GeneratedCredential,
    ProvisionErrorKind,
    ProvisionRequest,
    ProvisionResult,
)
from escolar_identity.application.dtos.session import (
    LoginResolution,
    LoginResult,
    PasswordChangeResult,
)

__all__ = [
    "GeneratedCredential",
    "LoginResolution",
    "LoginResult",
    "PasswordChangeResult",
    "ProvisionErrorKind",
    "ProvisionRequest",
    "ProvisionResult",
]
