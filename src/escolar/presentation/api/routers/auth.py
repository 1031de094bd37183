"""Authentication router: login, profile, password change and school sign-up."""

import logging

from fastapi import APIRouter, Depends, status

from escolar.presentation.api.config import get_api_settings
from escolar.presentation.api.dependencies import (
    AuthService,
    CurrentIdentity,
    DBSession,
    Policy,
    Provisioner,
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
from escolar_config.settings import Settings
from escolar_identity import (
    IdentityRole,
    PermissionDeniedError,
    ProvisionRequest,
)
from escolar_identity.domain.school import School
from escolar_identity.infrastructure.persistence.sqlalchemy import (
    SchoolRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/login",
    summary="Login with email, national id or registration number",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid login or password"},
        503: {"description": "Authentication service unavailable"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
) -> AuthResponse:
    """
    Authenticate and return an access token.

    Unknown identifiers, wrong passwords and deactivated accounts all get
    the same 401 response. When ``must_change_password`` is true the
    client must send the user to the password change screen first.
    """
    result = await auth_service.login(request.identifier, request.password)
    return AuthResponse(
        access_token=result.access_token,
        expires_in=result.expires_in,
        must_change_password=result.must_change_password,
        identity=IdentityResponse.from_identity(result.identity),
    )


@router.get(
    "/me",
    summary="Get the signed-in identity",
    responses={
        200: {"description": "Current identity"},
        401: {"description": "Not authenticated"},
    },
)
async def me(identity: CurrentIdentity) -> IdentityResponse:
    return IdentityResponse.from_identity(identity)


@router.post(
    "/change-password",
    status_code=status.HTTP_200_OK,
    summary="Change the caller's password",
    responses={
        200: {"description": "Password changed, first-login gate cleared"},
        400: {"description": "Password too short, too weak or not confirmed"},
        401: {"description": "Current password is incorrect"},
    },
)
async def change_password(
    request: ChangePasswordRequest,
    identity: CurrentIdentity,
    auth_service: AuthService,
    policy: Policy,
    session: DBSession,
) -> ChangePasswordResponse:
    """
    Replace the caller's password.

    This is also how the forced first-login change is completed.
    """
    await auth_service.verify_current_password(identity, request.current_password)

    result = await policy.complete_password_change(
        identity.id,
        request.new_password,
        confirm_password=request.confirm_password,
    )
    if not result.success:
        raise result.error

    await session.commit()
    logger.info("Identity %s changed its password", identity.id)
    return ChangePasswordResponse(strength=result.strength)


@router.post(
    "/register-school",
    status_code=status.HTTP_201_CREATED,
    summary="Register a school and its first admin",
    responses={
        201: {"description": "School and admin created"},
        400: {"description": "Invalid domain or email, or a rejected password"},
        403: {"description": "School registration is closed"},
        409: {"description": "Email already registered"},
        503: {"description": "Authentication service unavailable"},
    },
)
async def register_school(
    request: RegisterSchoolRequest,
    provisioner: Provisioner,
    policy: Policy,
    session: DBSession,
    settings: Settings = Depends(get_api_settings),
) -> RegisterSchoolResponse:
    """
    Create a school together with its first admin.

    The admin chooses the password here, so no password change is forced
    on first login. Nothing is stored when the admin cannot be created.
    """
    if settings.school_registration == "closed":
        msg = "School registration is closed. Contact the operator."
        raise PermissionDeniedError(msg)

    rejection = policy.validate_new_password(
        request.password,
        confirm_password=request.confirm_password,
    )
    if rejection is not None:
        raise rejection

    school = School(
        name=request.school_name.strip(),
        email_domain=request.email_domain,
    )
    await SchoolRepositorySQLAlchemy(session).save(school)

    result = await provisioner.provision(
        ProvisionRequest(
            full_name=request.admin_full_name,
            role=IdentityRole.ADMIN,
            tenant_id=school.id,
            email=str(request.admin_email),
            phone=request.admin_phone,
            password=request.password,
        ),
    )
    if not result.success:
        raise result.error

    logger.info(
        "School %s registered with admin %s",
        school.id,
        result.credential.login,
    )
    return RegisterSchoolResponse(
        school_id=school.id,
        school_name=school.name,
        identity_id=result.credential.identity_id,
        login=result.credential.login,
    )
