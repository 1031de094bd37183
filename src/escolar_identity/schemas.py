"""Identity schemas and data structures.

Simple data classes used for transferring authentication data between
components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT access token payload.

    Attributes
    ----------
    identity_id
        Internal id of the identity
    email
        The identity's login email
    role
        Role value (admin, secretary, teacher, student)
    tenant_id
        School the identity belongs to
    exp
        Token expiration timestamp
    """

    identity_id: UUID
    email: str
    role: str
    tenant_id: UUID
    exp: datetime

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp
