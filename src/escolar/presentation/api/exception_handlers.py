"""Centralized exception handlers for the FastAPI application.

Domain exceptions are mapped to HTTP responses with a consistent body:

    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from escolar_identity.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
)
from escolar_identity.exceptions import AuthError

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_NAME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_NATIONAL_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_SHORT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_WEAK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_LONG: status.HTTP_400_BAD_REQUEST,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.IDENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TENANT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict - already exists
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_REGISTERED: status.HTTP_409_CONFLICT,
    ErrorCode.REGISTRATION_NUMBER_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.NATIONAL_ID_TAKEN: status.HTTP_409_CONFLICT,
    ErrorCode.CONSTRAINT_VIOLATION: status.HTTP_409_CONFLICT,
    # 401 / 403 - authentication and authorization
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    # 503 Service Unavailable
    ErrorCode.IDENTIFIER_EXHAUSTED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.AUTH_PROVIDER_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:  # NOQA: PLR0911
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, ExternalServiceError):
        return status.HTTP_503_SERVICE_UNAVAILABLE

    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Rejected user input is logged at info level, everything else at
        warning level.
        """
        status_code = _get_status_for_exception(exc)
        level = logging.INFO if status_code < 500 else logging.WARNING  # NOQA: PLR2004

        logger.log(
            level,
            "Domain exception on %s %s: %s (code=%s, details=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
            exc.details,
        )

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        Catch-all for exceptions not handled above. Internal details are
        logged, never returned to the client.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
