"""
SQLite engines for integration tests.

pysqlite's own transaction handling breaks SAVEPOINTs, which the
repositories rely on, so the engine disables it and emits BEGIN itself.

Usage:
    from tests.shared.fixtures.database import create_sqlite_engine

    engine = create_sqlite_engine()
    await create_tables(engine)
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

SQLITE_URL = "sqlite+aiosqlite:///:memory:"


def create_sqlite_engine(url: str = SQLITE_URL) -> AsyncEngine:
    """Create an engine with working SAVEPOINTs.

    The in-memory database lives on one shared connection, so every
    session sees the same data.
    """
    options = {}
    if url == SQLITE_URL:
        options = {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    engine = create_async_engine(url, **options)

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, _):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine
