"""JWT token service.

Provides access token creation and verification for the HTTP API.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from escolar_identity.domain.identity import Identity
from escolar_identity.exceptions import InvalidTokenError
from escolar_identity.schemas import TokenPayload


class JWTService:
    """Service for JWT access token creation and verification.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(identity)
    >>> payload = service.verify_token(token)
    >>> print(payload.identity_id)
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 8
    ALGORITHM = "HS256"
    TOKEN_TYPE = "access"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_hours
            Hours until an access token expires (default 8, one school day)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(hours=access_token_expire_hours)

    @property
    def access_token_lifetime(self) -> timedelta:
        return self._access_expire

    def create_access_token(
        self,
        identity: Identity,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token for an identity.

        Parameters
        ----------
        identity
            The authenticated identity
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta or self._access_expire)

        payload = {
            "sub": str(identity.id),
            "email": identity.email,
            "role": identity.role.value,
            "tenant_id": str(identity.tenant_id),
            "type": self.TOKEN_TYPE,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode an access token.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, malformed, or not an access token
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
            )

            if payload.get("type", self.TOKEN_TYPE) != self.TOKEN_TYPE:
                msg = "Not an access token"
                raise InvalidTokenError(msg)

            return TokenPayload(
                identity_id=UUID(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
                tenant_id=UUID(payload["tenant_id"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e
