"""Unit tests for SessionPolicy."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from escolar_identity.application.ports import AuthProvider
from escolar_identity.application.services import SessionPolicy
from escolar_identity.domain.identity import IdentityNotFoundError
from escolar_identity.domain.shared import ErrorCode
from escolar_identity.exceptions import AuthProviderUnavailableError, WeakPasswordError

STRONG_PASSWORD = "Abcdefg1"  # 87.5
WEAK_PASSWORD = "abcdefgh"  # 50.0
BARELY_ACCEPTABLE_PASSWORD = "abcdefg1"  # 62.5


class TestSessionPolicy:
    """Tests for the first-login gate and password changes."""

    def setup_method(self):
        """Set up test fixtures."""
        self.identity_repo = AsyncMock()
        self.auth_provider = AsyncMock(spec=AuthProvider)
        self.policy = SessionPolicy(
            identity_repository=self.identity_repo,
            auth_provider=self.auth_provider,
        )

    @pytest.mark.asyncio
    async def test_is_first_login(self, student):
        """The flag of a provisioned identity is set."""
        self.identity_repo.find_by_id.return_value = student

        assert await self.policy.is_first_login(student.id) is True

    @pytest.mark.asyncio
    async def test_is_first_login_for_unknown_identity(self):
        """Unknown identities are not gated."""
        self.identity_repo.find_by_id.return_value = None

        assert await self.policy.is_first_login(uuid4()) is False

    @pytest.mark.asyncio
    async def test_weak_password_is_rejected_and_flag_kept(self, student):
        """A password below the threshold keeps the gate closed."""
        # Arrange
        self.identity_repo.find_by_id.return_value = student

        # Act
        result = await self.policy.complete_password_change(student.id, WEAK_PASSWORD)

        # Assert
        assert not result.success
        assert result.strength == 50.0
        assert isinstance(result.error, WeakPasswordError)
        assert result.error.code == ErrorCode.PASSWORD_TOO_WEAK
        assert student.is_first_login
        self.auth_provider.update_password.assert_not_awaited()
        self.identity_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_strong_password_clears_flag(self, student):
        """An acceptable password is stored and the gate opens."""
        # Arrange
        self.identity_repo.find_by_id.return_value = student

        # Act
        result = await self.policy.complete_password_change(
            student.id,
            STRONG_PASSWORD,
        )

        # Assert
        assert result.success
        assert result.strength == 87.5
        assert not student.is_first_login
        self.auth_provider.update_password.assert_awaited_once_with(
            "auth-student",
            STRONG_PASSWORD,
        )
        self.identity_repo.save.assert_awaited_once_with(student)

    @pytest.mark.asyncio
    async def test_short_password_is_rejected(self, student):
        """Length is checked before strength."""
        self.identity_repo.find_by_id.return_value = student

        result = await self.policy.complete_password_change(student.id, "Ab1!xyz")

        assert result.error.code == ErrorCode.PASSWORD_TOO_SHORT
        assert student.is_first_login

    @pytest.mark.asyncio
    async def test_confirmation_must_match(self, student):
        """A mismatching confirmation is rejected."""
        self.identity_repo.find_by_id.return_value = student

        result = await self.policy.complete_password_change(
            student.id,
            STRONG_PASSWORD,
            confirm_password="Abcdefg2",
        )

        assert result.error.code == ErrorCode.PASSWORD_MISMATCH
        assert student.is_first_login

    @pytest.mark.asyncio
    async def test_threshold_can_be_raised_per_call(self, student):
        """min_strength overrides the configured threshold."""
        self.identity_repo.find_by_id.return_value = student

        result = await self.policy.complete_password_change(
            student.id,
            "Abcdefgh",
            min_strength=80.0,
        )

        assert result.error.code == ErrorCode.PASSWORD_TOO_WEAK

    @pytest.mark.asyncio
    async def test_unknown_identity(self):
        """An unknown identity gives a not-found result."""
        self.identity_repo.find_by_id.return_value = None

        result = await self.policy.complete_password_change(uuid4(), STRONG_PASSWORD)

        assert isinstance(result.error, IdentityNotFoundError)
        self.auth_provider.update_password.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("password", "expected_strength"),
        [
            ("12345678", 37.5),
            ("abcdefgh", 50.0),
        ],
    )
    async def test_scores_below_threshold_are_rejected(
        self,
        student,
        password,
        expected_strength,
    ):
        """Scores under the default 60 never reach the auth provider."""
        self.identity_repo.find_by_id.return_value = student

        result = await self.policy.complete_password_change(student.id, password)

        assert not result.success
        assert result.strength == expected_strength
        assert result.error.code == ErrorCode.PASSWORD_TOO_WEAK
        self.auth_provider.update_password.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_score_just_above_threshold_is_accepted(self, student):
        """Lowercase letters, a digit and eight characters score 62.5."""
        self.identity_repo.find_by_id.return_value = student

        result = await self.policy.complete_password_change(
            student.id,
            BARELY_ACCEPTABLE_PASSWORD,
        )

        assert result.success
        assert result.strength == 62.5
        assert not student.is_first_login

    @pytest.mark.asyncio
    async def test_password_over_byte_limit_is_rejected(self, student):
        """Multi-byte characters count against the 72 byte hash limit."""
        # Arrange
        self.identity_repo.find_by_id.return_value = student
        password = "Senha#1" + "ã" * 40
        assert len(password) < 72 < len(password.encode("utf-8"))

        # Act
        result = await self.policy.complete_password_change(student.id, password)

        # Assert
        assert not result.success
        assert result.error.code == ErrorCode.PASSWORD_TOO_LONG
        assert student.is_first_login
        self.auth_provider.update_password.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_outage_is_a_failed_result(self, student):
        """An unreachable auth provider keeps the gate closed."""
        # Arrange
        self.identity_repo.find_by_id.return_value = student
        self.auth_provider.update_password.side_effect = AuthProviderUnavailableError(
            "timeout",
        )

        # Act
        result = await self.policy.complete_password_change(
            student.id,
            STRONG_PASSWORD,
        )

        # Assert
        assert not result.success
        assert isinstance(result.error, AuthProviderUnavailableError)
        assert result.strength == 87.5
        assert student.is_first_login
        self.identity_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_rejecting_the_password_is_a_failed_result(self, student):
        """A password the auth provider refuses is reported, not raised."""
        self.identity_repo.find_by_id.return_value = student
        self.auth_provider.update_password.side_effect = WeakPasswordError(
            "Password cannot exceed 72 bytes",
            ErrorCode.PASSWORD_TOO_LONG,
        )

        result = await self.policy.complete_password_change(
            student.id,
            STRONG_PASSWORD,
        )

        assert not result.success
        assert result.error.code == ErrorCode.PASSWORD_TOO_LONG
        assert student.is_first_login
        self.identity_repo.save.assert_not_awaited()


class TestValidateNewPassword:
    """Tests for the password checks shared with school registration."""

    def setup_method(self):
        """Set up test fixtures."""
        self.policy = SessionPolicy(
            identity_repository=AsyncMock(),
            auth_provider=AsyncMock(spec=AuthProvider),
        )

    def test_acceptable_password(self):
        assert self.policy.validate_new_password(STRONG_PASSWORD) is None

    def test_length_is_checked_before_strength(self):
        rejection = self.policy.validate_new_password("abc")

        assert rejection.code == ErrorCode.PASSWORD_TOO_SHORT

    def test_mismatching_confirmation(self):
        rejection = self.policy.validate_new_password(
            STRONG_PASSWORD,
            confirm_password="Abcdefg2",
        )

        assert rejection.code == ErrorCode.PASSWORD_MISMATCH
