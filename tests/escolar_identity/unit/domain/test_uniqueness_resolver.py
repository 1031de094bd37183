"""Unit tests for UniquenessResolver."""

import itertools
import logging
from unittest.mock import AsyncMock

import pytest

from escolar_identity.domain.identity import IdentifierExhaustedError
from escolar_identity.domain.identity.services import (
    DEFAULT_MAX_ATTEMPTS,
    UniquenessResolver,
)
from escolar_identity.domain.shared import ErrorCode


def _counter_factory():
    counter = itertools.count(1)
    return lambda: f"candidate-{next(counter)}"


class TestUniquenessResolver:
    """Tests for the bounded retry loop."""

    def setup_method(self):
        """Set up test fixtures."""
        self.resolver = UniquenessResolver()

    @pytest.mark.asyncio
    async def test_returns_first_candidate_when_free(self):
        """A free first candidate is returned unchanged."""
        # Arrange
        exists = AsyncMock(return_value=False)

        # Act
        result = await self.resolver.resolve(_counter_factory(), exists)

        # Assert
        assert result == "candidate-1"
        exists.assert_awaited_once_with("candidate-1")

    @pytest.mark.asyncio
    async def test_retries_until_a_candidate_is_free(self):
        """Taken candidates are skipped."""
        exists = AsyncMock(side_effect=[True, True, False])

        result = await self.resolver.resolve(_counter_factory(), exists)

        assert result == "candidate-3"
        assert exists.await_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_five_taken_candidates(self, caplog):
        """Five taken candidates exhaust the default budget."""
        # Arrange
        calls = []

        async def exists(candidate: str) -> bool:
            calls.append(candidate)
            return len(calls) <= DEFAULT_MAX_ATTEMPTS

        # Act
        with (
            caplog.at_level(logging.WARNING),
            pytest.raises(IdentifierExhaustedError) as exc_info,
        ):
            await self.resolver.resolve(_counter_factory(), exists)

        # Assert
        assert len(calls) == DEFAULT_MAX_ATTEMPTS
        assert exc_info.value.attempts == DEFAULT_MAX_ATTEMPTS
        assert exc_info.value.code == ErrorCode.IDENTIFIER_EXHAUSTED
        assert "after 5 attempts" in caplog.text

    @pytest.mark.asyncio
    async def test_per_call_budget_overrides_default(self):
        """max_attempts passed to resolve wins over the constructor value."""
        exists = AsyncMock(return_value=True)

        with pytest.raises(IdentifierExhaustedError):
            await self.resolver.resolve(_counter_factory(), exists, max_attempts=2)

        assert exists.await_count == 2

    @pytest.mark.asyncio
    async def test_uses_injected_logger(self):
        """Exhaustion is reported on the injected logger."""
        logger = logging.getLogger("test.resolver")
        resolver = UniquenessResolver(max_attempts=1, logger=logger)

        with pytest.raises(IdentifierExhaustedError):
            await resolver.resolve(lambda: "x", AsyncMock(return_value=True))

    def test_rejects_non_positive_budget(self):
        """A budget below one is a programming error."""
        with pytest.raises(ValueError, match="at least 1"):
            UniquenessResolver(max_attempts=0)
