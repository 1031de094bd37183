"""Pytest fixtures for API integration tests.

Runs the FastAPI app in-process against an in-memory SQLite database.
The ASGI transport does not run the lifespan, so tables are created here.
"""

import httpx
import pytest
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from escolar.presentation.api.app import API_V1_PREFIX, create_app
from escolar.presentation.api.config import get_api_settings
from escolar.presentation.api.dependencies import get_db_session, get_password_service
from escolar_config.settings import Settings
from escolar_identity import (
    AccountProvisioner,
    IdentityRole,
    PasswordHashingService,
    ProvisionRequest,
)
from escolar_identity.domain.school import School
from escolar_identity.infrastructure.auth import LocalAuthProvider
from escolar_identity.infrastructure.persistence.sqlalchemy import (
    EnrollmentRepositorySQLAlchemy,
    IdentityRepositorySQLAlchemy,
    SchoolRepositorySQLAlchemy,
    create_tables,
    drop_tables,
)

from tests.shared.fixtures.database import SQLITE_URL, create_sqlite_engine

TEST_SCHOOL_DOMAIN = "escola-teste.example.com"
ADMIN_EMAIL = "diretora@example.com"
SECRETARY_EMAIL = "secretaria@example.com"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and the local auth backend."""
    return Settings(
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        database_url_override=SQLITE_URL,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        auth_backend="local",
    )


@pytest.fixture
def password_service() -> PasswordHashingService:
    return PasswordHashingService(rounds=4)


@pytest.fixture
async def async_engine():
    engine = create_sqlite_engine()
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture
def session_maker(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def school(session_maker) -> School:
    """A stored school with its own login domain."""
    school = School(name="Escola Teste", email_domain=TEST_SCHOOL_DOMAIN)
    async with session_maker() as session:
        await SchoolRepositorySQLAlchemy(session).save(school)
        await session.commit()
    return school


async def _provision(session_maker, password_service, request: ProvisionRequest):
    async with session_maker() as session:
        provisioner = AccountProvisioner(
            identity_repository=IdentityRepositorySQLAlchemy(session),
            school_repository=SchoolRepositorySQLAlchemy(session),
            enrollment_repository=EnrollmentRepositorySQLAlchemy(session),
            auth_provider=LocalAuthProvider(session, password_service=password_service),
        )
        result = await provisioner.provision(request)
        assert result.success, result.error
        await session.commit()
    return result.credential


@pytest.fixture
async def admin_credential(session_maker, password_service, school):
    """Credential of the school's first admin, provisioned like the CLI does."""
    return await _provision(
        session_maker,
        password_service,
        ProvisionRequest(
            full_name="Ana Diretora",
            role=IdentityRole.ADMIN,
            tenant_id=school.id,
            email=ADMIN_EMAIL,
        ),
    )


@pytest.fixture
async def secretary_credential(session_maker, password_service, school):
    return await _provision(
        session_maker,
        password_service,
        ProvisionRequest(
            full_name="Carla Secretaria",
            role=IdentityRole.SECRETARY,
            tenant_id=school.id,
            email=SECRETARY_EMAIL,
        ),
    )


@pytest.fixture
async def test_client(api_settings, session_maker, password_service):
    """HTTP client talking to the app with test overrides in place."""
    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_password_service] = lambda: password_service

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def login(client: httpx.AsyncClient, identifier: str, password: str) -> dict:
    response = await client.post(
        f"{API_V1_PREFIX}/auth/login",
        json={"identifier": identifier, "password": password},
    )
    assert response.status_code == 200, (
        f"Login failed: {response.status_code} - {response.text}"
    )
    return response.json()


@pytest.fixture
async def admin_headers(test_client, admin_credential) -> dict:
    """Get auth headers for the admin."""
    data = await login(test_client, admin_credential.login, admin_credential.password)
    return {"Authorization": f"Bearer {data['access_token']}"}


@pytest.fixture
async def secretary_headers(test_client, secretary_credential) -> dict:
    data = await login(
        test_client,
        secretary_credential.login,
        secretary_credential.password,
    )
    return {"Authorization": f"Bearer {data['access_token']}"}
