"""Password hashing service using bcrypt.

Used by the local auth provider to store and verify credentials.
"""

from functools import lru_cache

import bcrypt

from escolar_identity.domain.shared import ErrorCode
from escolar_identity.exceptions import WeakPasswordError


@lru_cache(maxsize=8)
def _placeholder_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"escolar-placeholder", bcrypt.gensalt(rounds=rounds))


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hashed = service.hash("Segura#2024")
    >>> service.verify("Segura#2024", hashed)
    True
    """

    MIN_LENGTH = 8
    # bcrypt only looks at the first 72 bytes
    MAX_LENGTH = 72

    def __init__(self, rounds: int = 12):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations). Tests use a low
            value to stay fast.
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If password is empty or outside the accepted length
        """
        self.validate_length(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def verify_placeholder(self, password: str) -> bool:
        """Spend the work of ``verify`` when there is no hash to check.

        Used for unknown accounts so they answer as slowly as wrong
        passwords. Always returns ``False``.
        """
        self.verify(password, _placeholder_hash(self._rounds).decode("utf-8"))
        return False

    def validate_length(self, password: str) -> None:
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg, ErrorCode.PASSWORD_TOO_SHORT)

        if len(password.encode("utf-8")) > self.MAX_LENGTH:
            msg = f"Password cannot exceed {self.MAX_LENGTH} bytes"
            raise WeakPasswordError(msg, ErrorCode.PASSWORD_TOO_LONG)
