"""Commission API endpoints: calculation, contract scheduling and ledger."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from utilitycrm.db import get_db
from utilitycrm.models import CommissionStatus
from utilitycrm.schemas.commission import (
    CommissionEntryResponse,
    CommissionListResponse,
    CommissionRequestSchema,
    CommissionScheduleResponse,
    CommissionStatusUpdate,
    ScheduleContractRequest,
)
from utilitycrm.services import catalog, ledger
from utilitycrm.services.commission import MissingRequiredField, calculate_commissions

router = APIRouter(prefix="/commissions", tags=["Commissions"])


@router.post("/calculate", response_model=CommissionScheduleResponse)
async def calculate(data: CommissionRequestSchema):
    """
    Calculate a commission schedule without storing it.

    Used by the commission calculator page and by contract creation
    to preview what the agent will be paid.
    """
    try:
        payments = calculate_commissions(data.to_request())
    except MissingRequiredField as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )

    return CommissionScheduleResponse.from_payments(payments)


@router.post(
    "/schedule",
    response_model=CommissionScheduleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def schedule_contract(
    data: ScheduleContractRequest,
    db: AsyncSession = Depends(get_db),
):
    """Compute and store the commission schedule of a newly created contract."""
    offer = await catalog.get_offer(db, data.offer_id)
    if not offer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Offer not found",
        )

    try:
        payments = await ledger.schedule_contract_commissions(db, data.to_terms(), offer)
    except MissingRequiredField as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        )
    except ledger.LedgerError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    return CommissionScheduleResponse.from_payments(payments)


@router.get("", response_model=CommissionListResponse)
async def list_commissions(
    db: AsyncSession = Depends(get_db),
    agent_id: Optional[str] = Query(None, alias="agentId"),
    contract_id: Optional[str] = Query(None, alias="contractId"),
    status_filter: Optional[CommissionStatus] = Query(None, alias="status"),
):
    """
    List ledger entries.

    Agents only see their own commissions, so the agent views always pass
    agentId; back-office lists everything.
    """
    entries = await ledger.list_entries(
        db,
        agent_id=agent_id,
        contract_id=contract_id,
        status=status_filter,
    )

    return CommissionListResponse(
        items=[CommissionEntryResponse.model_validate(e) for e in entries],
        total=len(entries),
        totals=ledger.summarize(entries),
    )


@router.patch("/{entry_id}", response_model=CommissionEntryResponse)
async def update_commission_status(
    entry_id: int,
    data: CommissionStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Mark an entry as paid, flagged or unpaid."""
    entry = await ledger.update_status(db, entry_id, data.status)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Commission entry not found",
        )

    return CommissionEntryResponse.model_validate(entry)
