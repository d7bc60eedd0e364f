"""
Health check endpoints.

/ready also checks that the offer catalog has been seeded: without active
offers no contract can have its commissions scheduled.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from utilitycrm.db import get_db
from utilitycrm.models import Offer

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """Process is up."""
    return {"status": "healthy", "service": "utilitycrm"}


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Database reachable and at least one active offer in the catalog."""
    try:
        active_offers = await db.scalar(
            select(func.count()).select_from(Offer).where(Offer.active.is_(True))
        )
    except SQLAlchemyError as e:
        return {
            "status": "not_ready",
            "database": f"error: {e.__class__.__name__}",
            "active_offers": 0,
        }

    return {
        "status": "ready" if active_offers else "not_ready",
        "database": "connected",
        "active_offers": active_offers,
    }


@router.get("/live")
async def liveness_check():
    """Liveness check."""
    return {"status": "alive"}
