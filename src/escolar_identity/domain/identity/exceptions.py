"""Identity domain exceptions.

Custom exceptions for the identity domain, used for validation
and business rule violations.
"""

from escolar_identity.domain.shared import (
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class InvalidNameError(ValidationError):
    """Raised when a full name has nothing to build identifiers from."""

    def __init__(self, message: str = "Full name must contain at least one letter"):
        super().__init__(message, ErrorCode.INVALID_NAME)


class InvalidNationalIdError(ValidationError):
    """Raised when a national id does not have the expected digits."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_NATIONAL_ID)


class IdentityNotFoundError(EntityNotFoundError):
    """Identity not found."""

    def __init__(self, identity_id: str) -> None:
        self.identity_id = identity_id
        super().__init__(
            f"Identity not found: {identity_id}",
            ErrorCode.IDENTITY_NOT_FOUND,
            {"identity_id": identity_id},
        )


class TenantNotFoundError(EntityNotFoundError):
    """School not found."""

    def __init__(self, tenant_id: str) -> None:
        self.tenant_id = tenant_id
        super().__init__(
            "School not found",
            ErrorCode.TENANT_NOT_FOUND,
            {"tenant_id": tenant_id},
        )


class AccountNotFoundError(EntityNotFoundError):
    """No identity owns the given login identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(
            "Account not found",
            ErrorCode.ACCOUNT_NOT_FOUND,
            {"identifier": identifier},
        )


class IdentityConstraintError(ConflictError):
    """A profile row violated a persistence constraint."""

    def __init__(
        self,
        message: str = "Identity data conflicts with an existing record",
        code: ErrorCode = ErrorCode.CONSTRAINT_VIOLATION,
        details: dict | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EmailAlreadyExistsError(IdentityConstraintError):
    """Email already used by another identity."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "Email already registered",
            ErrorCode.EMAIL_ALREADY_REGISTERED,
            {"email": email},
        )


class RegistrationNumberAlreadyExistsError(IdentityConstraintError):
    """Registration number already used by another identity."""

    def __init__(self, registration_number: str) -> None:
        self.registration_number = registration_number
        super().__init__(
            "Registration number already in use",
            ErrorCode.REGISTRATION_NUMBER_TAKEN,
            {"registration_number": registration_number},
        )


class NationalIdAlreadyExistsError(IdentityConstraintError):
    """National id already used by another identity."""

    def __init__(self) -> None:
        super().__init__(
            "National id already registered",
            ErrorCode.NATIONAL_ID_TAKEN,
        )


class IdentifierExhaustedError(DomainException):
    """No collision-free identifier was found within the attempt budget."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(
            "Could not generate a unique identifier after several attempts. "
            "Please try again.",
            ErrorCode.IDENTIFIER_EXHAUSTED,
            {"attempts": attempts},
        )
