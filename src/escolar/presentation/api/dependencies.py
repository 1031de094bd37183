"""FastAPI dependency injection for the ABC Escolar API.

Provides dependencies for:
- Database sessions
- The configured auth provider
- Authentication (current identity from JWT)
- Application service instances
"""

import logging
from functools import lru_cache
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from escolar.presentation.api.config import get_api_settings
from escolar_config.settings import Settings, get_settings
from escolar_identity import (
    AccountProvisioner,
    AuthenticationService,
    AuthProvider,
    Identity,
    IdentityContext,
    InvalidTokenError,
    JWTService,
    PasswordHashingService,
    SessionPolicy,
)
from escolar_identity.domain.identity.services import UniquenessResolver
from escolar_identity.infrastructure.auth import (
    LocalAuthProvider,
    SupabaseAuthProvider,
)
from escolar_identity.infrastructure.persistence.sqlalchemy import (
    EnrollmentRepositorySQLAlchemy,
    IdentityRepositorySQLAlchemy,
    SchoolRepositorySQLAlchemy,
    session_committer,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_database_url() -> str:
    """Get database URL from application settings."""
    return get_settings().database_url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(
    settings: Settings = Depends(get_api_settings),
) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service() -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService()


@lru_cache(maxsize=1)
def get_supabase_auth_provider() -> SupabaseAuthProvider:
    """Get the shared Supabase provider (one HTTP client per process)."""
    settings = get_settings()
    key = settings.supabase_service_role_key
    return SupabaseAuthProvider(
        base_url=settings.supabase_url,
        service_role_key=key.get_secret_value() if key else "",
        timeout=settings.auth_provider_timeout_seconds,
    )


def get_auth_provider(
    session: DBSession,
    settings: Settings = Depends(get_api_settings),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthProvider:
    """Get the auth provider selected by ``AUTH_BACKEND``.

    The local provider stores accounts in the request's session so a
    provisioning commit covers both the account and the profile.
    """
    if settings.auth_backend == "supabase":
        return get_supabase_auth_provider()
    return LocalAuthProvider(session, password_service=password_service)


async def close_auth_providers() -> None:
    """Close the shared Supabase HTTP client if one was created."""
    if get_supabase_auth_provider.cache_info().currsize == 0:
        return
    await get_supabase_auth_provider().close()
    get_supabase_auth_provider.cache_clear()


AuthProviderDep = Annotated[AuthProvider, Depends(get_auth_provider)]


async def get_authentication_service(
    session: DBSession,
    auth_provider: AuthProviderDep,
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AuthenticationService:
    """Get authentication service with all dependencies."""
    return AuthenticationService(
        identity_repository=IdentityRepositorySQLAlchemy(session),
        auth_provider=auth_provider,
        jwt_service=jwt_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


async def get_account_provisioner(
    session: DBSession,
    auth_provider: AuthProviderDep,
    settings: Settings = Depends(get_api_settings),
) -> AccountProvisioner:
    """Get the account provisioner wired to the configured policy.

    The provisioner commits the request's session itself once a profile is
    stored, so routers must not commit after a successful provisioning.
    """
    return AccountProvisioner(
        identity_repository=IdentityRepositorySQLAlchemy(session),
        school_repository=SchoolRepositorySQLAlchemy(session),
        enrollment_repository=EnrollmentRepositorySQLAlchemy(session),
        auth_provider=auth_provider,
        resolver=UniquenessResolver(max_attempts=settings.identifier_max_attempts),
        synthetic_email_domain=settings.synthetic_email_domain,
        commit=session_committer(session),
    )


Provisioner = Annotated[AccountProvisioner, Depends(get_account_provisioner)]


async def get_session_policy(
    session: DBSession,
    auth_provider: AuthProviderDep,
    settings: Settings = Depends(get_api_settings),
) -> SessionPolicy:
    """Get the first-login / password policy service."""
    return SessionPolicy(
        identity_repository=IdentityRepositorySQLAlchemy(session),
        auth_provider=auth_provider,
        min_length=settings.password_min_length,
        min_strength=settings.password_min_strength,
    )


Policy = Annotated[SessionPolicy, Depends(get_session_policy)]


# -----------------------------------------------------------------------------
# Current Identity (JWT Authentication)
# -----------------------------------------------------------------------------


async def get_current_identity(
    auth_service: AuthService,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> Identity:
    """
    FastAPI dependency to get the current authenticated identity from JWT.

    Raises
    ------
    HTTPException
        401 if token is missing, invalid, or the identity is gone
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await auth_service.identity_for_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Rejected token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


# Type alias for injected current identity
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


async def require_staff(
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    """Require an admin or secretary."""
    if not identity.is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Staff access required",
        )
    return identity


# Type alias for staff identity
StaffIdentity = Annotated[Identity, Depends(require_staff)]


async def get_identity_context(
    identity: Identity = Depends(require_staff),
) -> IdentityContext:
    """Get the IdentityContext of the calling staff member."""
    return IdentityContext.create(identity)


# Type alias for injected staff context
StaffContext = Annotated[IdentityContext, Depends(get_identity_context)]
