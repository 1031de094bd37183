"""Identity aggregate: one person able to log in to a school."""

from datetime import date, datetime
from typing import Union
from uuid import UUID, uuid4

from escolar_identity.domain.identity.value_objects import (
    Email,
    IdentityRole,
    NationalId,
)
from escolar_identity.domain.shared.time import utc_now


class Identity:
    """
    Identity aggregate root.

    Holds the profile data of a person (name, contact, role) plus the link
    to the authentication provider. Credentials themselves live with the
    provider; this aggregate only tracks the first-login gate and whether
    the account is active.
    """

    def __init__(  # noqa: PLR0913
        self,
        tenant_id: UUID,
        full_name: str,
        email: Union[str, Email],
        role: Union[str, IdentityRole],
        id: UUID | None = None,
        auth_user_id: str | None = None,
        national_id: Union[str, NationalId, None] = None,
        registration_number: str | None = None,
        phone: str | None = None,
        address: str | None = None,
        birth_date: date | None = None,
        active: bool = True,
        first_login: bool = True,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._id = id or uuid4()
        self._tenant_id = tenant_id
        self._auth_user_id = auth_user_id
        self._full_name = full_name.strip()
        self._email = email if isinstance(email, Email) else Email(email)
        self._role = role if isinstance(role, IdentityRole) else IdentityRole(role)
        if national_id is None or isinstance(national_id, NationalId):
            self._national_id = national_id
        else:
            self._national_id = NationalId(national_id)
        self._registration_number = registration_number
        self._phone = phone
        self._address = address
        self._birth_date = birth_date
        self._active = active
        self._first_login = first_login
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def tenant_id(self) -> UUID:
        return self._tenant_id

    @property
    def auth_user_id(self) -> str | None:
        return self._auth_user_id

    @property
    def full_name(self) -> str:
        return self._full_name

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def role(self) -> IdentityRole:
        return self._role

    @property
    def national_id(self) -> str | None:
        return self._national_id.value if self._national_id else None

    @property
    def registration_number(self) -> str | None:
        return self._registration_number

    @property
    def phone(self) -> str | None:
        return self._phone

    @property
    def address(self) -> str | None:
        return self._address

    @property
    def birth_date(self) -> date | None:
        return self._birth_date

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_first_login(self) -> bool:
        return self._first_login

    @property
    def is_staff(self) -> bool:
        return self._role.is_staff

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def complete_first_login(self) -> None:
        """Clear the forced-password-change gate."""
        self._first_login = False
        self._updated_at = utc_now()

    def require_password_change(self) -> None:
        """Force a password change on the next login (after a reset)."""
        self._first_login = True
        self._updated_at = utc_now()

    def deactivate(self) -> None:
        self._active = False
        self._updated_at = utc_now()

    def activate(self) -> None:
        self._active = True
        self._updated_at = utc_now()

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        tenant_id: UUID,
        full_name: str,
        email: Union[str, Email],
        role: IdentityRole,
        auth_user_id: str | None = None,
        national_id: Union[str, NationalId, None] = None,
        registration_number: str | None = None,
        phone: str | None = None,
        address: str | None = None,
        birth_date: date | None = None,
    ) -> "Identity":
        """Create a freshly provisioned identity.

        New identities are always active and must change their password on
        first login.
        """
        return cls(
            tenant_id=tenant_id,
            full_name=full_name,
            email=email,
            role=role,
            auth_user_id=auth_user_id,
            national_id=national_id,
            registration_number=registration_number,
            phone=phone,
            address=address,
            birth_date=birth_date,
            active=True,
            first_login=True,
        )

    @classmethod
    def reconstitute(cls, **fields) -> "Identity":
        return cls(**fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Identity):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Identity(id={self._id}, email={self._email.value}, "
            f"role={self._role.value})"
        )
