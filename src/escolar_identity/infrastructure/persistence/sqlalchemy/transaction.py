"""Commit callables handed to application services."""

from typing import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession


def session_committer(session: AsyncSession) -> Callable[[], Awaitable[None]]:
    """Return a callable committing ``session``.

    A failed commit is rolled back before the error propagates, so the
    session can still be used for compensating work.
    """

    async def commit() -> None:
        try:
            await session.commit()
        except Exception:
            await session.rollback()
            raise

    return commit
