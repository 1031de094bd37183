"""Request and response schemas for the API."""

from escolar.presentation.api.schemas.admin import (
    CredentialResponse,
    IdentitySummaryResponse,
    ProvisionIdentityRequest,
    ResetPasswordRequest,
)
from escolar.presentation.api.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ChangePasswordResponse,
    IdentityResponse,
    LoginRequest,
    RegisterSchoolRequest,
    RegisterSchoolResponse,
)

__all__ = [
    "AuthResponse",
    "ChangePasswordRequest",
    "ChangePasswordResponse",
    "CredentialResponse",
    "IdentityResponse",
    "IdentitySummaryResponse",
    "LoginRequest",
    "ProvisionIdentityRequest",
    "RegisterSchoolRequest",
    "RegisterSchoolResponse",
    "ResetPasswordRequest",
]
