"""Offer catalog API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from utilitycrm.db import get_db
from utilitycrm.models import Department
from utilitycrm.schemas.catalog import OfferCreate, OfferResponse, ProviderResponse
from utilitycrm.services import catalog

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/providers", response_model=List[ProviderResponse])
async def list_providers(
    db: AsyncSession = Depends(get_db),
    department: Optional[Department] = Query(None),
):
    """List providers."""
    return await catalog.list_providers(db, department=department)


@router.get("/offers", response_model=List[OfferResponse])
async def list_offers(
    db: AsyncSession = Depends(get_db),
    provider_id: Optional[str] = Query(None, alias="providerId"),
    department: Optional[Department] = Query(None),
    active_only: bool = Query(False, alias="activeOnly"),
):
    """List offers, e.g. the active offers of the provider picked on a contract."""
    return await catalog.list_offers(
        db,
        provider_id=provider_id,
        department=department,
        active_only=active_only,
    )


@router.get("/offers/{offer_id}", response_model=OfferResponse)
async def get_offer(
    offer_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a single offer."""
    offer = await catalog.get_offer(db, offer_id)
    if not offer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Offer not found",
        )
    return offer


@router.post(
    "/offers",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_offer(
    data: OfferCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create an offer."""
    try:
        offer = await catalog.create_offer(db, data.to_draft())
    except catalog.CatalogError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    return offer
