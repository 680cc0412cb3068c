"""
Recorded payment routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tripledger.core.exceptions import LedgerError
from tripledger.db.session import get_db
from tripledger.schemas.member import Member
from tripledger.schemas.payment import RecordedPayment, RecordedPaymentCreate
from tripledger.api.routes.trips import get_trip_or_404, list_members
from tripledger.services.payment_service import (
    PAYMENT_SORTS,
    filter_payments,
    list_payments,
    record_payment,
    unique_recorders,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/{trip_id}", response_model=RecordedPayment, status_code=status.HTTP_201_CREATED)
async def add_payment(
    trip_id: str,
    payment_data: RecordedPaymentCreate,
    db: Session = Depends(get_db)
):
    """Record a payment that already happened, e.g. a confirmed settlement transfer."""
    get_trip_or_404(trip_id, db)
    
    try:
        return record_payment(trip_id, payment_data, db)
    except LedgerError as e:
        logger.warning(f"Rejected payment for trip {trip_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/{trip_id}", response_model=List[RecordedPayment])
async def get_payments(
    trip_id: str,
    recorded_by: Optional[str] = None,
    sort: str = Query("date-desc"),
    db: Session = Depends(get_db)
):
    """Payment history, optionally filtered by who recorded it."""
    get_trip_or_404(trip_id, db)
    if sort not in PAYMENT_SORTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown sort '{sort}'"
        )
    return filter_payments(list_payments(trip_id, db), recorded_by=recorded_by, sort=sort)


@router.get("/{trip_id}/recorders", response_model=List[Member])
async def get_recorders(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Everyone who has recorded a payment, for filtering the history."""
    get_trip_or_404(trip_id, db)
    names = {m.id: m.display_name for m in list_members(trip_id, db)}
    return [
        Member(id=member_id, display_name=name)
        for member_id, name in unique_recorders(list_payments(trip_id, db), names)
    ]
