"""
Pytest configuration for escolar_identity tests.

Fixtures for identities and schools shared by unit and integration tests.
"""

from uuid import UUID

import pytest

from escolar_identity.domain.identity import Identity, IdentityRole
from escolar_identity.domain.school import School

TEST_SCHOOL_ID = UUID("12345678-1234-5678-1234-567812345678")
TEST_SCHOOL_DOMAIN = "school.test"


@pytest.fixture
def school() -> School:
    """A school with its own domain for synthesized logins."""
    return School(name="Escola Teste", email_domain=TEST_SCHOOL_DOMAIN, id=TEST_SCHOOL_ID)


@pytest.fixture
def student() -> Identity:
    """A freshly provisioned student."""
    return Identity.create(
        tenant_id=TEST_SCHOOL_ID,
        full_name="Maria Silva",
        email="2024MS0042@school.test",
        role=IdentityRole.STUDENT,
        auth_user_id="auth-student",
        registration_number="2024MS0042",
    )


@pytest.fixture
def admin() -> Identity:
    """An admin who already completed the first login."""
    identity = Identity.create(
        tenant_id=TEST_SCHOOL_ID,
        full_name="Ana Diretora",
        email="ana@example.com",
        role=IdentityRole.ADMIN,
        auth_user_id="auth-admin",
    )
    identity.complete_first_login()
    return identity
