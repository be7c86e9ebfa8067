"""Health check endpoint — reports configuration only, never touches the database."""

from fastapi import APIRouter

from crm.config import get_settings
from crm.infrastructure.database import engine

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": engine.url.get_backend_name(),
        "charset": settings.database_charset,
    }
