"""Authentication schemas for request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from escolar_identity import Identity


class LoginRequest(BaseModel):
    """Request schema for login.

    ``identifier`` may be an email, a national id (CPF, with or without
    punctuation) or a student registration number.
    """

    identifier: str = Field(..., min_length=1, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "identifier": "2024MS0042",
                "password": "Xy7!pq2#Lm9@",
            },
        },
    )


class IdentityResponse(BaseModel):
    """Response schema for the signed-in identity."""

    id: UUID
    tenant_id: UUID
    full_name: str
    email: str
    role: str
    registration_number: str | None = None
    must_change_password: bool
    created_at: datetime

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentityResponse":
        return cls(
            id=identity.id,
            tenant_id=identity.tenant_id,
            full_name=identity.full_name,
            email=identity.email,
            role=identity.role.value,
            registration_number=identity.registration_number,
            must_change_password=identity.is_first_login,
            created_at=identity.created_at,
        )


class AuthResponse(BaseModel):
    """Response schema for a successful login."""

    access_token: str
    token_type: str = "bearer"  # NOQA: S105
    expires_in: int = Field(..., description="Token lifetime in seconds")
    must_change_password: bool = Field(
        ...,
        description="Client must force a password change before anything else",
    )
    identity: IdentityResponse


class ChangePasswordRequest(BaseModel):
    """Request schema for changing the caller's password."""

    current_password: str
    new_password: str = Field(..., max_length=72)
    confirm_password: str | None = None


class ChangePasswordResponse(BaseModel):
    """Response schema for a completed password change."""

    message: str = "Password changed successfully"
    strength: float
    must_change_password: bool = False


class RegisterSchoolRequest(BaseModel):
    """Request schema for self-service school registration.

    Creates the school and its first admin, who signs in with the chosen
    password right away.
    """

    school_name: str = Field(..., min_length=1, max_length=200)
    email_domain: str | None = Field(default=None, max_length=253)
    admin_full_name: str = Field(..., min_length=1, max_length=200)
    admin_email: EmailStr
    admin_phone: str | None = Field(default=None, max_length=30)
    password: str = Field(..., max_length=72)
    confirm_password: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "school_name": "Escola Municipal Monteiro Lobato",
                "email_domain": "monteirolobato.edu.br",
                "admin_full_name": "Ana Paula Ribeiro",
                "admin_email": "diretoria@monteirolobato.edu.br",
                "password": "Xy7!pq2#Lm9@",
                "confirm_password": "Xy7!pq2#Lm9@",
            },
        },
    )


class RegisterSchoolResponse(BaseModel):
    """Response schema for a registered school."""

    school_id: UUID
    school_name: str
    identity_id: UUID
    login: str
