"""Database schema management."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Import models to register with Base.metadata
import escolar_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from escolar_identity.infrastructure.persistence.sqlalchemy.base import Base

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


async def drop_tables(engine: AsyncEngine) -> None:
    """Drop all database tables (USE WITH CAUTION!)."""
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.info("Database tables dropped successfully")
