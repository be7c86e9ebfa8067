"""V1 API router — aggregates all v1 endpoint routers under /api/v1."""

from fastapi import APIRouter

from crm.presentation.api.v1.endpoints.health import router as health_router
from crm.presentation.api.v1.endpoints.customers import router as customers_router

router = APIRouter(prefix="/api/v1")
router.include_router(health_router)
router.include_router(customers_router)
