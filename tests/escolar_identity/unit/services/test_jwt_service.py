"""Unit tests for JWTService."""

from datetime import timedelta

import jwt
import pytest

from escolar_identity.exceptions import InvalidTokenError
from escolar_identity.services import JWTService

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"


class TestJWTService:
    """Tests for access token creation and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(secret_key=TEST_SECRET)

    def test_round_trip(self, student):
        """A created token decodes to the identity's claims."""
        # Act
        token = self.service.create_access_token(student)
        payload = self.service.verify_token(token)

        # Assert
        assert payload.identity_id == student.id
        assert payload.email == student.email
        assert payload.role == "student"
        assert payload.tenant_id == student.tenant_id
        assert not payload.is_expired()

    def test_default_lifetime_is_one_school_day(self):
        """Tokens live for eight hours by default."""
        assert self.service.access_token_lifetime == timedelta(hours=8)

    def test_expired_token(self, student):
        """Expired tokens are rejected."""
        token = self.service.create_access_token(
            student,
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            self.service.verify_token(token)

    def test_token_signed_with_other_secret(self, student):
        """Tokens of another deployment are rejected."""
        other = JWTService(secret_key="another-secret-key-of-sufficient-size")
        token = other.create_access_token(student)

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_non_access_token(self, student):
        """Tokens with a different type claim are rejected."""
        token = jwt.encode(
            {
                "sub": str(student.id),
                "email": student.email,
                "role": "student",
                "tenant_id": str(student.tenant_id),
                "type": "refresh",
            },
            TEST_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_garbage_token(self):
        """Malformed input is an invalid token, not a crash."""
        with pytest.raises(InvalidTokenError):
            self.service.verify_token("not-a-jwt")

    def test_empty_secret(self):
        """An empty secret is a configuration error."""
        with pytest.raises(ValueError):
            JWTService(secret_key="")
