"""
Settlement routes. Every response is recomputed from the current snapshot.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from tripledger.db.session import get_db
from tripledger.schemas.settlement import MemberFinancials, SettlementPlan, SettlementSummary
from tripledger.api.routes.trips import get_trip_or_404
from tripledger.services.ledger_service import aggregate
from tripledger.services.report_service import build_settlement_summary
from tripledger.services.settlement_service import calculate_settlement, settle
from tripledger.services.snapshot_service import load_trip_snapshot

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.get("/{trip_id}/financials", response_model=List[MemberFinancials])
async def get_financials(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Each member's paid, share and net balance."""
    get_trip_or_404(trip_id, db)
    snapshot = load_trip_snapshot(trip_id, db)
    return aggregate(snapshot.members, snapshot.expenses, snapshot.payments)


@router.get("/{trip_id}/plan", response_model=SettlementPlan)
async def get_settlement_plan(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Suggested transfers that settle all outstanding balances."""
    get_trip_or_404(trip_id, db)
    return calculate_settlement(trip_id, db)


@router.get("/{trip_id}/summary", response_model=SettlementSummary)
async def get_settlement_summary(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Settlement summary with a plain-text report for export."""
    get_trip_or_404(trip_id, db)
    snapshot = load_trip_snapshot(trip_id, db)
    financials = aggregate(snapshot.members, snapshot.expenses, snapshot.payments)
    return build_settlement_summary(
        financials,
        settle(financials),
        snapshot.expenses,
        base_currency=snapshot.base_currency,
    )
