"""School aggregate: the tenant that owns a set of identities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from escolar_identity.domain.identity.value_objects.email import Email
from escolar_identity.domain.shared.time import utc_now


@dataclass
class School:
    """A school (tenant).

    ``email_domain`` is used to synthesize login emails for students and
    staff provisioned without a real address.

    Raises
    ------
    InvalidEmailError
        If ``email_domain`` cannot form an email address
    """

    name: str
    email_domain: str | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.email_domain = (self.email_domain or "").strip().lower() or None
        if self.email_domain is not None:
            Email.synthesize("login", self.email_domain)

    def synthetic_email_domain(self, default: str) -> str:
        return self.email_domain or default
