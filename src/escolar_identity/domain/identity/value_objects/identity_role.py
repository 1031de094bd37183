from enum import Enum


class IdentityRole(str, Enum):
    """Closed set of roles an identity can hold inside a school."""

    ADMIN = "admin"
    SECRETARY = "secretary"
    TEACHER = "teacher"
    STUDENT = "student"

    @property
    def handle_prefix(self) -> str:
        """Short tag used at the front of generated login handles."""
        return _HANDLE_PREFIXES[self]

    @property
    def is_staff(self) -> bool:
        """Whether this role may administer other identities."""
        return self in (IdentityRole.ADMIN, IdentityRole.SECRETARY)


_HANDLE_PREFIXES = {
    IdentityRole.ADMIN: "adm",
    IdentityRole.SECRETARY: "sec",
    IdentityRole.TEACHER: "prof",
    IdentityRole.STUDENT: "aluno",
}
