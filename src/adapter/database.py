"""
Async engine and session factory.

SQLite has no row locks, so ``SELECT ... FOR UPDATE`` on the tenant row is a
no-op there. For SQLite engines every transaction is started with
``BEGIN IMMEDIATE`` instead, which takes the database write lock up front:
two transactions can then never both read a tenant's count before either
inserts. Other dialects keep their default BEGIN and rely on the row lock.
"""

import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

logger = logging.getLogger(__name__)


def install_sqlite_write_lock(engine: AsyncEngine) -> None:
    """Make every transaction on a SQLite engine begin with BEGIN IMMEDIATE"""
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        # Stop the driver from emitting its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(db_uri: str, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(db_uri, echo=echo, future=True)
    if engine.dialect.name == "sqlite":
        install_sqlite_write_lock(engine)
        logger.debug("SQLite engine: transactions begin with BEGIN IMMEDIATE")
    return engine


def build_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
