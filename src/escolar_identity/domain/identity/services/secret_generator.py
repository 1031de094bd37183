"""Generators for passwords, registration numbers and login handles.

Passwords are drawn from the ``secrets`` CSPRNG. Registration numbers and
login handles only need to differ between calls (uniqueness is enforced by
the caller against persistence), so their suffixes come from a clock-based
tick that is forced to advance on every call.
"""

import secrets
import string
import time
import unicodedata
from typing import Callable, Optional

from escolar_identity.domain.identity.exceptions import InvalidNameError
from escolar_identity.domain.identity.value_objects import IdentityRole
from escolar_identity.domain.shared.time import current_year

PASSWORD_LENGTH = 12
PASSWORD_SYMBOLS = "!@#$%&*+-="

_PASSWORD_CLASSES = (
    string.ascii_lowercase,
    string.ascii_uppercase,
    string.digits,
    PASSWORD_SYMBOLS,
)
_PASSWORD_ALPHABET = "".join(_PASSWORD_CLASSES)

REGISTRATION_SUFFIX_DIGITS = 4
HANDLE_SUFFIX_DIGITS = 6
MAX_INITIALS = 3
MAX_HANDLE_NAME_PARTS = 2


def _microseconds() -> int:
    return time.time_ns() // 1_000


def name_tokens(full_name: str) -> list[str]:
    """Split a name into ASCII-letter tokens.

    Diacritics are stripped (``"João"`` becomes ``"Joao"``) and any other
    non-letter character is dropped.
    """
    decomposed = unicodedata.normalize("NFD", full_name or "")
    without_marks = "".join(c for c in decomposed if not unicodedata.combining(c))
    tokens = []
    for raw in without_marks.split():
        token = "".join(c for c in raw if c in string.ascii_letters)
        if token:
            tokens.append(token)
    return tokens


class SecretGenerator:
    """Produces passwords and human-facing login identifiers.

    Parameters
    ----------
    clock
        Returns a monotonically increasing-ish integer tick (microseconds by
        default). Injected in tests to make suffixes deterministic.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or _microseconds
        self._last_tick = -1

    def generate_password(self) -> str:
        """Generate a 12-character password with every character class."""
        chars = [secrets.choice(alphabet) for alphabet in _PASSWORD_CLASSES]
        chars += [
            secrets.choice(_PASSWORD_ALPHABET)
            for _ in range(PASSWORD_LENGTH - len(chars))
        ]
        secrets.SystemRandom().shuffle(chars)
        return "".join(chars)

    def generate_registration_number(
        self,
        full_name: str,
        enrollment_year: int | None = None,
    ) -> str:
        """Build ``{year}{initials}{4-digit suffix}``, e.g. ``2024MS0042``.

        Raises
        ------
        InvalidNameError
            If the name contains no letters
        """
        tokens = name_tokens(full_name)
        if not tokens:
            raise InvalidNameError
        year = enrollment_year or current_year()
        initials = "".join(token[0] for token in tokens[:MAX_INITIALS]).upper()
        suffix = self._suffix(REGISTRATION_SUFFIX_DIGITS)
        return f"{year}{initials}{suffix}"

    def generate_login_handle(self, full_name: str, role: IdentityRole) -> str:
        """Build ``{prefix}.{first.second}.{year}.{6-digit suffix}``.

        Raises
        ------
        InvalidNameError
            If the name contains no letters
        """
        tokens = name_tokens(full_name)
        if not tokens:
            raise InvalidNameError
        name_part = ".".join(t.lower() for t in tokens[:MAX_HANDLE_NAME_PARTS])
        suffix = self._suffix(HANDLE_SUFFIX_DIGITS)
        return f"{role.handle_prefix}.{name_part}.{current_year()}.{suffix}"

    def _suffix(self, digits: int) -> str:
        return str(self._next_tick() % 10**digits).zfill(digits)

    def _next_tick(self) -> int:
        tick = self._clock()
        if tick <= self._last_tick:
            tick = self._last_tick + 1
        self._last_tick = tick
        return tick
