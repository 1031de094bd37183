"""Bounded retry loop for generated identifiers."""

import logging
from typing import Awaitable, Callable, Optional

from escolar_identity.domain.identity.exceptions import IdentifierExhaustedError

DEFAULT_MAX_ATTEMPTS = 5

CandidateFactory = Callable[[], str]
ExistsCheck = Callable[[str], Awaitable[bool]]


class UniquenessResolver:
    """Find a generated identifier that is not taken yet.

    Parameters
    ----------
    max_attempts
        Number of candidates to try before giving up
    logger
        Logger for exhaustion warnings (defaults to the module logger)
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        logger: Optional[logging.Logger] = None,
    ):
        if max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        self._max_attempts = max_attempts
        self._logger = logger or logging.getLogger(__name__)

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def resolve(
        self,
        candidate_factory: CandidateFactory,
        exists: ExistsCheck,
        max_attempts: int | None = None,
    ) -> str:
        """Return the first candidate for which ``exists`` is false.

        Every attempt calls ``candidate_factory`` again.

        Raises
        ------
        IdentifierExhaustedError
            If every attempt produced a taken candidate
        """
        attempts = max_attempts or self._max_attempts
        for attempt in range(1, attempts + 1):
            candidate = candidate_factory()
            if not await exists(candidate):
                return candidate
            self._logger.debug(
                "Identifier candidate %s taken (attempt %d/%d)",
                candidate,
                attempt,
                attempts,
            )

        self._logger.warning(
            "Could not find a free identifier after %d attempts",
            attempts,
        )
        raise IdentifierExhaustedError(attempts)
