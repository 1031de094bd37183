"""Admin router: provisioning and credential resets inside a school."""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, status

from escolar.presentation.api.dependencies import (
    DBSession,
    Provisioner,
    StaffContext,
)
from escolar.presentation.api.schemas.admin import (
    CredentialResponse,
    IdentitySummaryResponse,
    ProvisionIdentityRequest,
    ResetPasswordRequest,
)
from escolar_identity import (
    IdentityContext,
    PermissionDeniedError,
    ProvisionRequest,
)
from escolar_identity.domain.identity import IdentityNotFoundError, IdentityRole
from escolar_identity.infrastructure.persistence.sqlalchemy import (
    IdentityRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


def _ensure_can_manage(staff: IdentityContext, role: IdentityRole) -> None:
    if not staff.can_provision(role):
        logger.warning("%s may not manage %s accounts", staff, role.value)
        msg = f"Not allowed to manage {role.value} accounts"
        raise PermissionDeniedError(msg)


@router.get(
    "/identities",
    summary="List the identities of the caller's school",
    responses={
        200: {"description": "Identities of the school"},
        403: {"description": "Staff access required"},
    },
)
async def list_identities(
    staff: StaffContext,
    session: DBSession,
) -> list[IdentitySummaryResponse]:
    identity_repo = IdentityRepositorySQLAlchemy(session)
    identities = await identity_repo.list_by_tenant(staff.tenant_id)
    return [IdentitySummaryResponse.from_identity(i) for i in identities]


@router.post(
    "/identities",
    status_code=status.HTTP_201_CREATED,
    summary="Provision a new identity",
    responses={
        201: {"description": "Identity created, credential returned once"},
        400: {"description": "Invalid name, email or national id"},
        403: {"description": "Not allowed to provision this role"},
        409: {"description": "Email, national id or registration number taken"},
        503: {"description": "No free login or auth service unavailable"},
    },
)
async def provision_identity(
    request: ProvisionIdentityRequest,
    staff: StaffContext,
    provisioner: Provisioner,
) -> CredentialResponse:
    """
    Provision an identity in the caller's school.

    Secretaries provision teachers and students; admins provision anyone.
    The plaintext password is only ever returned in this response.
    """
    _ensure_can_manage(staff, request.role)

    result = await provisioner.provision(
        ProvisionRequest(
            full_name=request.full_name,
            role=request.role,
            tenant_id=staff.tenant_id,
            email=str(request.email) if request.email else None,
            national_id=request.national_id,
            phone=request.phone,
            address=request.address,
            birth_date=request.birth_date,
            class_id=request.class_id,
            provisioned_by=staff.identity_id,
        ),
    )
    if not result.success:
        raise result.error

    return CredentialResponse.from_credential(result.credential)


@router.post(
    "/identities/{identity_id}/reset-password",
    summary="Reset an identity's password",
    responses={
        200: {"description": "Password reset, credential returned once"},
        403: {"description": "Not allowed to manage this role"},
        404: {"description": "Identity not found"},
    },
)
async def reset_password(
    identity_id: UUID,
    staff: StaffContext,
    provisioner: Provisioner,
    session: DBSession,
    request: ResetPasswordRequest | None = Body(default=None),
) -> CredentialResponse:
    """
    Replace an identity's password and force a change on next login.

    A password is generated when none is given.
    """
    identity_repo = IdentityRepositorySQLAlchemy(session)
    target = await identity_repo.find_by_id(identity_id)
    if target is None or target.tenant_id != staff.tenant_id:
        raise IdentityNotFoundError(str(identity_id))
    _ensure_can_manage(staff, target.role)

    result = await provisioner.reset_password(
        identity_id,
        new_password=request.new_password if request else None,
    )
    if not result.success:
        raise result.error

    await session.commit()
    return CredentialResponse.from_credential(result.credential)
