"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
identity core. All domain exceptions should inherit from DomainException
to enable centralized exception handling in the presentation layer.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_NAME = "INVALID_NAME"
    INVALID_NATIONAL_ID = "INVALID_NATIONAL_ID"
    PASSWORD_TOO_SHORT = "PASSWORD_TOO_SHORT"
    PASSWORD_TOO_WEAK = "PASSWORD_TOO_WEAK"
    PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
    PASSWORD_TOO_LONG = "PASSWORD_TOO_LONG"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    IDENTITY_NOT_FOUND = "IDENTITY_NOT_FOUND"
    TENANT_NOT_FOUND = "TENANT_NOT_FOUND"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    REGISTRATION_NUMBER_TAKEN = "REGISTRATION_NUMBER_TAKEN"
    NATIONAL_ID_TAKEN = "NATIONAL_ID_TAKEN"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"

    # Authentication / Authorization (401/403)
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Identifier namespace saturation (503)
    IDENTIFIER_EXHAUSTED = "IDENTIFIER_EXHAUSTED"

    # External provider errors (503)
    AUTH_PROVIDER_UNAVAILABLE = "AUTH_PROVIDER_UNAVAILABLE"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    This exception provides structured error information that can be
    used by the presentation layer to generate consistent API responses.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ExternalServiceError(DomainException):
    """Raised when an external collaborator cannot be reached."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.AUTH_PROVIDER_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
