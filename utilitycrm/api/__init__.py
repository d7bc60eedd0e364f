"""API router aggregation."""

from fastapi import APIRouter

from utilitycrm.api.catalog import router as catalog_router
from utilitycrm.api.commissions import router as commissions_router
from utilitycrm.api.health import router as health_router

# Main API router (for /api/* endpoints)
api_router = APIRouter(prefix="/api")

# Include API sub-routers
api_router.include_router(health_router)
api_router.include_router(catalog_router)
api_router.include_router(commissions_router)

__all__ = ["api_router"]
