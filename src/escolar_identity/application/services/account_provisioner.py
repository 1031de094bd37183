"""Two-phase account provisioning: auth identity first, profile row second.

If the profile row cannot be written, the auth identity created just before
it is deleted again so no login exists without a profile.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Optional
from uuid import UUID

from escolar_identity.application.dtos import (
    GeneratedCredential,
    ProvisionErrorKind,
    ProvisionRequest,
    ProvisionResult,
)
from escolar_identity.domain.identity import (
    Email,
    EmailAlreadyExistsError,
    IdentifierExhaustedError,
    Identity,
    IdentityConstraintError,
    IdentityNotFoundError,
    IdentityRole,
    InvalidNameError,
    NationalId,
    RegistrationNumberAlreadyExistsError,
    TenantNotFoundError,
)
from escolar_identity.domain.identity.services import (
    SecretGenerator,
    UniquenessResolver,
)
from escolar_identity.domain.identity.services.secret_generator import name_tokens
from escolar_identity.domain.shared import ErrorCode, ValidationError
from escolar_identity.exceptions import (
    AuthProviderUnavailableError,
    EmailAlreadyRegisteredError,
    WeakPasswordError,
)
from escolar_identity.services import PasswordHashingService

if TYPE_CHECKING:
    from escolar_identity.application.ports import AuthProvider
    from escolar_identity.domain.identity import (
        EnrollmentRepository,
        IdentityRepository,
    )
    from escolar_identity.domain.school import School, SchoolRepository

DEFAULT_SYNTHETIC_EMAIL_DOMAIN = "abcescolar.com"
MIN_CHOSEN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class _ResolvedLogin:
    email: str
    login: str
    username: Optional[str]
    registration_number: Optional[str]
    synthesized: bool


class _LateCollision(Exception):  # noqa: N818
    """A synthesized identifier was taken between the check and the insert."""

    def __init__(self, cause: Exception):
        super().__init__(str(cause))
        self.cause = cause


class AccountProvisioner:
    """
    Application service that creates logins for a school.

    Orchestrates the identifier generators, the uniqueness resolver, the
    auth provider and the identity repository:
    - Provisioning with a real or a synthesized email
    - Compensating delete of the auth identity when the profile fails
    - Best-effort class enrollment for students
    - Administrative password resets

    When a ``commit`` callable is given it is awaited once the profile is
    stored. If it fails the auth identity is deleted as well, so remote
    auth backends never keep a login whose profile was rolled back.
    """

    def __init__(  # noqa: PLR0913
        self,
        identity_repository: IdentityRepository,
        school_repository: SchoolRepository,
        enrollment_repository: EnrollmentRepository,
        auth_provider: AuthProvider,
        generator: SecretGenerator | None = None,
        resolver: UniquenessResolver | None = None,
        synthetic_email_domain: str = DEFAULT_SYNTHETIC_EMAIL_DOMAIN,
        commit: Callable[[], Awaitable[None]] | None = None,
        logger: logging.Logger | None = None,
    ):
        self._identity_repo = identity_repository
        self._school_repo = school_repository
        self._enrollment_repo = enrollment_repository
        self._auth_provider = auth_provider
        self._generator = generator or SecretGenerator()
        self._logger = logger or logging.getLogger(__name__)
        self._resolver = resolver or UniquenessResolver(logger=self._logger)
        self._default_domain = synthetic_email_domain
        self._commit = commit

    async def provision(self, request: ProvisionRequest) -> ProvisionResult:
        """Create an auth identity plus profile and return the credential.

        Expected failures come back as a failed ``ProvisionResult``.
        Unexpected errors propagate after the compensating delete ran.
        """
        try:
            school = await self._validate(request)
        except (ValidationError, TenantNotFoundError) as e:
            return ProvisionResult.fail(ProvisionErrorKind.INVALID_INPUT, e)

        domain = school.synthetic_email_domain(self._default_domain)
        password = request.password or self._generator.generate_password()

        if request.email:
            login = _ResolvedLogin(
                email=Email(request.email).value,
                login=Email(request.email).value,
                username=None,
                registration_number=None,
                synthesized=False,
            )
            try:
                credential = await self._create_account(request, login, password)
            except (
                IdentityConstraintError,
                EmailAlreadyRegisteredError,
                AuthProviderUnavailableError,
                ValidationError,
            ) as e:
                return self._failure_for(e)
            return ProvisionResult.ok(credential)

        attempts = self._resolver.max_attempts
        for attempt in range(1, attempts + 1):
            try:
                login = await self._synthesize_login(request, domain)
                credential = await self._create_account(request, login, password)
            except IdentifierExhaustedError as e:
                return ProvisionResult.fail(ProvisionErrorKind.EXHAUSTED, e)
            except ValidationError as e:
                self._logger.error("Provisioning rejected on domain %s: %s", domain, e)
                return ProvisionResult.fail(ProvisionErrorKind.INVALID_INPUT, e)
            except _LateCollision as e:
                self._logger.info(
                    "Synthesized login collided at insert (attempt %d/%d): %s",
                    attempt,
                    attempts,
                    e.cause.code.value,
                )
                continue
            except (
                IdentityConstraintError,
                EmailAlreadyRegisteredError,
                AuthProviderUnavailableError,
            ) as e:
                return self._failure_for(e)
            return ProvisionResult.ok(credential)

        self._logger.warning(
            "Gave up provisioning %s after %d late collisions",
            IdentityRole(request.role).value,
            attempts,
        )
        return ProvisionResult.fail(
            ProvisionErrorKind.EXHAUSTED,
            IdentifierExhaustedError(attempts),
        )

    async def reset_password(
        self,
        identity_id: UUID,
        new_password: str | None = None,
    ) -> ProvisionResult:
        """Replace an identity's password and force a change on next login.

        A generated password is used when ``new_password`` is not given.
        """
        identity = await self._identity_repo.find_by_id(identity_id)
        if identity is None or identity.auth_user_id is None:
            return ProvisionResult.fail(
                ProvisionErrorKind.NOT_FOUND,
                IdentityNotFoundError(str(identity_id)),
            )

        if new_password is not None:
            rejection = _check_chosen_password(new_password)
            if rejection is not None:
                return ProvisionResult.fail(ProvisionErrorKind.INVALID_INPUT, rejection)
        password = new_password or self._generator.generate_password()

        try:
            await self._auth_provider.update_password(identity.auth_user_id, password)
        except AuthProviderUnavailableError as e:
            self._logger.error("Password reset failed for %s: %r", identity_id, e)
            return ProvisionResult.fail(ProvisionErrorKind.PROVIDER_UNAVAILABLE, e)
        except WeakPasswordError as e:
            return ProvisionResult.fail(ProvisionErrorKind.INVALID_INPUT, e)

        identity.require_password_change()
        try:
            await self._identity_repo.save(identity)
        except Exception:
            self._logger.warning(
                "Password of %s was reset but the first-login flag could not "
                "be set",
                identity_id,
                exc_info=True,
            )

        self._logger.info("Password reset for identity %s", identity_id)
        return ProvisionResult.ok(
            GeneratedCredential(
                identity_id=identity.id,
                login=identity.registration_number or identity.email,
                password=password,
                registration_number=identity.registration_number,
            ),
        )

    async def _validate(self, request: ProvisionRequest) -> School:
        if not name_tokens(request.full_name):
            raise InvalidNameError
        if not isinstance(request.role, IdentityRole):
            try:
                IdentityRole(request.role)
            except ValueError as e:
                msg = f"Unknown role: {request.role}"
                raise ValidationError(msg) from e
        if request.email:
            Email(request.email)
        if request.national_id:
            NationalId(request.national_id)
        if request.password is not None:
            rejection = _check_chosen_password(request.password)
            if rejection is not None:
                raise rejection

        school = await self._school_repo.find_by_id(request.tenant_id)
        if school is None:
            raise TenantNotFoundError(str(request.tenant_id))
        return school

    async def _synthesize_login(
        self,
        request: ProvisionRequest,
        domain: str,
    ) -> _ResolvedLogin:
        role = IdentityRole(request.role)
        full_name = request.full_name

        if role == IdentityRole.STUDENT:
            registration_number = await self._resolver.resolve(
                lambda: self._generator.generate_registration_number(full_name),
                self._identity_repo.exists_by_registration_number,
            )
            # First candidate reuses the resolved number, later ones draw anew
            pending = [registration_number]

            def student_email() -> str:
                number = (
                    pending.pop()
                    if pending
                    else self._generator.generate_registration_number(full_name)
                )
                return Email.synthesize(number, domain).value

            email = await self._resolver.resolve(
                student_email,
                self._identity_repo.exists_by_email,
            )
            registration_number = email.rpartition("@")[0]
            return _ResolvedLogin(
                email=email,
                login=registration_number,
                username=registration_number,
                registration_number=registration_number,
                synthesized=True,
            )

        email = await self._resolver.resolve(
            lambda: Email.synthesize(
                self._generator.generate_login_handle(full_name, role),
                domain,
            ).value,
            self._identity_repo.exists_by_email,
        )
        return _ResolvedLogin(
            email=email,
            login=email,
            username=email.rpartition("@")[0],
            registration_number=None,
            synthesized=True,
        )

    async def _create_account(
        self,
        request: ProvisionRequest,
        login: _ResolvedLogin,
        password: str,
    ) -> GeneratedCredential:
        role = IdentityRole(request.role)
        metadata = {
            "full_name": request.full_name.strip(),
            "role": role.value,
            "tenant_id": str(request.tenant_id),
            "username": login.username,
            "is_synthetic_email": login.synthesized,
        }
        pre_confirmed = request.provisioned_by is not None or login.synthesized

        try:
            auth_user_id = await self._auth_provider.create_identity(
                email=login.email,
                password=password,
                metadata=metadata,
                pre_confirmed=pre_confirmed,
            )
        except EmailAlreadyRegisteredError as e:
            if login.synthesized:
                raise _LateCollision(e) from e
            raise

        try:
            identity = Identity.create(
                tenant_id=request.tenant_id,
                full_name=request.full_name,
                email=login.email,
                role=role,
                auth_user_id=auth_user_id,
                national_id=request.national_id or None,
                registration_number=login.registration_number,
                phone=request.phone,
                address=request.address,
                birth_date=request.birth_date,
            )
            if request.password is not None:
                # Chosen by the account holder, nothing to change on first login
                identity.complete_first_login()
            await self._identity_repo.save(identity)
        except (Exception, asyncio.CancelledError) as e:
            await self._compensate(auth_user_id, e)
            if login.synthesized and isinstance(
                e,
                (EmailAlreadyExistsError, RegistrationNumberAlreadyExistsError),
            ):
                raise _LateCollision(e) from e
            raise

        self._logger.info(
            "Provisioned %s %s (identity %s)",
            role.value,
            login.login,
            identity.id,
        )

        if role == IdentityRole.STUDENT and request.class_id is not None:
            await self._enroll(identity.id, request.class_id)

        if self._commit is not None:
            try:
                await self._commit()
            except (Exception, asyncio.CancelledError) as e:
                await self._compensate(auth_user_id, e)
                raise

        return GeneratedCredential(
            identity_id=identity.id,
            login=login.login,
            password=password,
            synthesized_email=login.email if login.synthesized else None,
            registration_number=login.registration_number,
        )

    async def _compensate(self, auth_user_id: str, cause: BaseException) -> None:
        try:
            # Shielded so a cancelled caller still removes the auth identity
            await asyncio.shield(self._auth_provider.delete_identity(auth_user_id))
        except Exception:
            self._logger.critical(
                "Orphaned auth identity %s: compensating delete failed after "
                "profile insert error %r",
                auth_user_id,
                cause,
                exc_info=True,
            )
        else:
            self._logger.warning(
                "Deleted auth identity %s after profile insert failed: %r",
                auth_user_id,
                cause,
            )

    async def _enroll(self, identity_id: UUID, class_id: UUID) -> None:
        try:
            await self._enrollment_repo.enroll(identity_id, class_id)
        except Exception:
            self._logger.warning(
                "Could not enroll student %s in class %s",
                identity_id,
                class_id,
                exc_info=True,
            )

    def _failure_for(self, error: Exception) -> ProvisionResult:
        if isinstance(error, ValidationError):
            return ProvisionResult.fail(ProvisionErrorKind.INVALID_INPUT, error)
        if isinstance(error, (EmailAlreadyRegisteredError, EmailAlreadyExistsError)):
            return ProvisionResult.fail(ProvisionErrorKind.DUPLICATE_EMAIL, error)
        if isinstance(error, AuthProviderUnavailableError):
            self._logger.error("Auth provider unavailable: %r", error)
            return ProvisionResult.fail(ProvisionErrorKind.PROVIDER_UNAVAILABLE, error)
        return ProvisionResult.fail(ProvisionErrorKind.CONSTRAINT_VIOLATION, error)


def _check_chosen_password(password: str) -> WeakPasswordError | None:
    if len(password) < MIN_CHOSEN_PASSWORD_LENGTH:
        return WeakPasswordError(
            f"Password must be at least {MIN_CHOSEN_PASSWORD_LENGTH} characters",
            ErrorCode.PASSWORD_TOO_SHORT,
        )
    if len(password.encode("utf-8")) > PasswordHashingService.MAX_LENGTH:
        return WeakPasswordError(
            f"Password cannot exceed {PasswordHashingService.MAX_LENGTH} bytes",
            ErrorCode.PASSWORD_TOO_LONG,
        )
    return None
