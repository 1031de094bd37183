"""Authentication and auth-provider exceptions.

These exceptions are raised by the auth adapters and the authentication
services. They share the DomainException hierarchy so the presentation
layer renders them with the same error codes as domain errors.
"""

from escolar_identity.domain.shared import (
    ConflictError,
    DomainException,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
)


class AuthError(DomainException):
    """Base exception for all authentication errors."""

    def __init__(
        self,
        message: str = "Authentication error",
        code: ErrorCode = ErrorCode.INVALID_CREDENTIALS,
    ):
        super().__init__(message, code)


class InvalidCredentialsError(AuthError):
    """Raised when a login identifier or password is wrong.

    The message is the same for unknown accounts, wrong passwords and
    inactive accounts.
    """

    def __init__(self, message: str = "Invalid login or password"):
        super().__init__(message, ErrorCode.INVALID_CREDENTIALS)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message, ErrorCode.INVALID_TOKEN)


class PermissionDeniedError(AuthError):
    """Raised when the caller's role does not allow the operation."""

    def __init__(self, message: str = "You are not allowed to do this"):
        super().__init__(message, ErrorCode.PERMISSION_DENIED)


class WeakPasswordError(ValidationError):
    """Raised when a password doesn't meet the password policy."""

    def __init__(
        self,
        message: str = "Password does not meet requirements",
        code: ErrorCode = ErrorCode.PASSWORD_TOO_WEAK,
    ):
        super().__init__(message, code)


class EmailAlreadyRegisteredError(ConflictError):
    """Raised by an auth provider when the email already has an account."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            "Email already registered",
            ErrorCode.EMAIL_ALREADY_REGISTERED,
            {"email": email},
        )


class AuthProviderUnavailableError(ExternalServiceError):
    """Raised when the auth provider cannot be reached or fails unexpectedly."""

    def __init__(self, detail: str = ""):
        super().__init__(
            "Connection problem with the authentication service. "
            "Please try again.",
            ErrorCode.AUTH_PROVIDER_UNAVAILABLE,
            {"detail": detail} if detail else None,
        )
