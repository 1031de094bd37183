"""Admin schemas for provisioning and managing school identities."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from escolar_identity import GeneratedCredential, Identity, IdentityRole


class ProvisionIdentityRequest(BaseModel):
    """Request schema for provisioning an identity.

    Leave ``email`` empty to have a login synthesized: a registration
    number for students, a login handle for everybody else.
    """

    full_name: str = Field(..., min_length=1, max_length=200)
    role: IdentityRole
    email: EmailStr | None = None
    national_id: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=30)
    address: str | None = Field(default=None, max_length=300)
    birth_date: date | None = None
    class_id: UUID | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "full_name": "Maria Silva Souza",
                "role": "student",
                "class_id": "1b4e28ba-2fa1-11d2-883f-0016d3cca427",
            },
        },
    )


class ResetPasswordRequest(BaseModel):
    """Request schema for an administrative password reset."""

    new_password: str | None = Field(default=None, max_length=72)


class CredentialResponse(BaseModel):
    """Plaintext credential. Shown once, never stored."""

    identity_id: UUID
    login: str
    password: str
    synthesized_email: str | None = None
    registration_number: str | None = None

    @classmethod
    def from_credential(cls, credential: GeneratedCredential) -> "CredentialResponse":
        return cls(
            identity_id=credential.identity_id,
            login=credential.login,
            password=credential.password,
            synthesized_email=credential.synthesized_email,
            registration_number=credential.registration_number,
        )


class IdentitySummaryResponse(BaseModel):
    """Response schema for an identity in admin listings."""

    id: UUID
    full_name: str
    email: str
    role: str
    registration_number: str | None = None
    active: bool
    must_change_password: bool
    created_at: datetime

    @classmethod
    def from_identity(cls, identity: Identity) -> "IdentitySummaryResponse":
        return cls(
            id=identity.id,
            full_name=identity.full_name,
            email=identity.email,
            role=identity.role.value,
            registration_number=identity.registration_number,
            active=identity.is_active,
            must_change_password=identity.is_first_login,
            created_at=identity.created_at,
        )
