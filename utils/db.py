"""
Database utilities for the users API.

Provides engine construction and schema initialization. The SQL dialect is
whatever DATABASE_URL names (PostgreSQL in production, SQLite in tests).
"""

import logging

from sqlalchemy import Column, Integer, MetaData, Table, Text, create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from utils.config import settings

logger = logging.getLogger(__name__)

metadata = MetaData()

# Integer autoincrement primary key renders as SERIAL on PostgreSQL
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text),
    Column("email", Text),
)


def get_engine(database_url: str) -> Engine:
    """
    Create a pooled SQLAlchemy engine for the given database URL.

    The engine is safe to share between request threads.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Engine (no connection is opened until first use)
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False

    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def init_schema(engine: Engine) -> None:
    """
    Create the users table if it doesn't exist.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If schema creation fails
    """
    metadata.create_all(engine, checkfirst=True)
    logger.info("DB schema ready (dialect=%s)", engine.dialect.name)


@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(settings.DB_CONNECT_MAX_RETRIES),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
)
def wait_for_schema(engine: Engine) -> None:
    """
    Initialize the schema, retrying while the database is unreachable.

    Used at startup, where the database may still be booting.

    Raises:
        sqlalchemy.exc.OperationalError: If the database stays unreachable
    """
    logger.info("Connecting to database: %s", engine.url.render_as_string(hide_password=True))
    init_schema(engine)
