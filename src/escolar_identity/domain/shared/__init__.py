"""Shared domain components.

This module exports the exception hierarchy and time helpers used across
the identity domain and its application services.
"""

from escolar_identity.domain.shared.exceptions import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ExternalServiceError,
    ValidationError,
)
from escolar_identity.domain.shared.time import current_year, utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "EntityNotFoundError",
    "ConflictError",
    "ExternalServiceError",
    # Utilities
    "current_year",
    "utc_now",
]
