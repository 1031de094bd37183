"""Unit tests for IdentityContext permissions."""

import pytest

from escolar_identity.application.context import IdentityContext
from escolar_identity.domain.identity import Identity, IdentityRole

from tests.escolar_identity.conftest import TEST_SCHOOL_ID


def _context(role: IdentityRole) -> IdentityContext:
    return IdentityContext.create(
        Identity.create(
            tenant_id=TEST_SCHOOL_ID,
            full_name="Someone",
            email="someone@example.com",
            role=role,
        ),
    )


@pytest.mark.parametrize(
    ("caller", "target", "allowed"),
    [
        (IdentityRole.ADMIN, IdentityRole.ADMIN, True),
        (IdentityRole.ADMIN, IdentityRole.SECRETARY, True),
        (IdentityRole.ADMIN, IdentityRole.STUDENT, True),
        (IdentityRole.SECRETARY, IdentityRole.TEACHER, True),
        (IdentityRole.SECRETARY, IdentityRole.STUDENT, True),
        (IdentityRole.SECRETARY, IdentityRole.ADMIN, False),
        (IdentityRole.SECRETARY, IdentityRole.SECRETARY, False),
        (IdentityRole.TEACHER, IdentityRole.STUDENT, False),
        (IdentityRole.STUDENT, IdentityRole.STUDENT, False),
    ],
)
def test_can_provision(caller, target, allowed):
    """Secretaries manage teachers and students, admins manage everyone."""
    assert _context(caller).can_provision(target) is allowed


def test_create_copies_identity_fields(admin):
    """The context mirrors the identity it was built from."""
    context = IdentityContext.create(admin)

    assert context.identity_id == admin.id
    assert context.tenant_id == TEST_SCHOOL_ID
    assert context.is_admin
    assert context.is_staff
