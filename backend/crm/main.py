"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crm.config import get_settings
from crm.infrastructure.database import engine
from crm.infrastructure.database.bootstrap import ensure_database_exists, init_database
from crm.infrastructure.database.schema import get_schema_configuration
from crm.infrastructure.logging.log_config import setup_logging
from crm.presentation.api.v1.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — ensure the database, register and create the schema."""
    settings = get_settings()
    setup_logging()
    schema_config = get_schema_configuration()

    # 0. Ensure the MySQL database exists (auto-create if missing)
    if settings.database_auto_create:
        await ensure_database_exists(settings.database_url, schema_config)

    # 1. Register column caps + charset, verify existing tables, create missing ones.
    #    A SchemaConflictError here aborts startup.
    await init_database(engine, schema_config)
    logger.info("Database ready (%s)", engine.url.get_backend_name())

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "crm.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
