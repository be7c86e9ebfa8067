"""Database bootstrap — runs once at startup, before any request is served."""

import logging

from sqlalchemy import MetaData, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from crm.infrastructure.database.base import Base
from crm.infrastructure.database import models  # noqa: F401  (registers tables)
from crm.infrastructure.database.schema import (
    SchemaConfiguration,
    SchemaRegistrar,
    verify_physical_schema,
)
from crm.infrastructure.logging.startup_logger import StartupLogger, StartupStage

logger = logging.getLogger(__name__)


async def ensure_database_exists(database_url: str, config: SchemaConfiguration) -> None:
    """Create the MySQL database with the configured charset when it is missing.

    Connects to the server without selecting a database and issues
    ``CREATE DATABASE IF NOT EXISTS``. Other backends are left alone.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "mysql" or not url.database:
        return

    db_name = url.database
    server_engine = create_async_engine(url.set(drivername="mysql+aiomysql", database=None))
    try:
        quoted = server_engine.dialect.identifier_preparer.quote_identifier(db_name)
        async with server_engine.begin() as conn:
            await conn.execute(
                text(
                    f"CREATE DATABASE IF NOT EXISTS {quoted} "
                    f"CHARACTER SET {config.charset} COLLATE {config.collation}"
                )
            )
        logger.debug("Database '%s' is present", db_name)
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)
    finally:
        await server_engine.dispose()


async def init_database(
    engine: AsyncEngine,
    config: SchemaConfiguration,
    metadata: MetaData = Base.metadata,
) -> None:
    """Register the schema, check it against existing tables, then create missing ones.

    A ``SchemaConflictError`` from the verification step aborts startup.
    """
    log = StartupLogger("crm.bootstrap")

    with log.timed_step(StartupStage.SCHEMA, "Registering schema", tables=len(metadata.tables)):
        SchemaRegistrar(config).apply(metadata)
        log.detail("Column caps", key=config.key_length, bounded=config.bounded_length)
        log.detail("Table options", charset=config.charset, collation=config.collation)

    with log.timed_step(StartupStage.VERIFY, "Verifying existing tables"):
        async with engine.connect() as conn:
            await conn.run_sync(verify_physical_schema, metadata)
        log.detail("Backend", dialect=engine.url.get_backend_name())

    with log.timed_step(StartupStage.DATABASE, "Creating missing tables"):
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
