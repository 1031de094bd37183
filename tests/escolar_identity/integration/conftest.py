"""Integration test fixtures backed by an in-memory SQLite database."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from escolar_identity.domain.school import School
from escolar_identity.infrastructure.persistence.sqlalchemy import (
    SchoolRepositorySQLAlchemy,
    create_tables,
    drop_tables,
)

from tests.escolar_identity.conftest import TEST_SCHOOL_DOMAIN, TEST_SCHOOL_ID
from tests.shared.fixtures.database import create_sqlite_engine


@pytest.fixture
async def engine():
    """Fresh in-memory database with all tables."""
    engine = create_sqlite_engine()
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest.fixture
async def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker):
    """A session that is rolled back after the test."""
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_school(session) -> School:
    """The test school, stored."""
    school = School(name="Escola Teste", email_domain=TEST_SCHOOL_DOMAIN, id=TEST_SCHOOL_ID)
    await SchoolRepositorySQLAlchemy(session).save(school)
    return school
