"""
Expense management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tripledger.core.exceptions import LedgerError
from tripledger.db.session import get_db
from tripledger.schemas.expense import CategorySummaryResponse, ExpenseCreate, ExpenseResponse
from tripledger.api.routes.trips import get_trip_or_404, list_members
from tripledger.services.expense_service import (
    EXPENSE_SORTS,
    create_expense,
    describe_split,
    filter_expenses,
    list_expenses,
    summarize_categories,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("/{trip_id}", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    trip_id: str,
    expense_data: ExpenseCreate,
    db: Session = Depends(get_db)
):
    """Create a new expense. Invalid splits are rejected before anything is written."""
    trip = get_trip_or_404(trip_id, db)
    
    try:
        expense = create_expense(trip_id, expense_data, db)
    except LedgerError as e:
        logger.warning(f"Rejected expense for trip {trip_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    
    names = {m.id: m.display_name for m in list_members(trip_id, db)}
    return ExpenseResponse(
        **expense.model_dump(),
        trip_id=trip_id,
        split_description=describe_split(expense, names, trip.base_currency),
    )


@router.get("/{trip_id}", response_model=List[ExpenseResponse])
async def get_expenses(
    trip_id: str,
    category: Optional[str] = None,
    paid_by: Optional[str] = None,
    sort: str = Query("date-desc"),
    db: Session = Depends(get_db)
):
    """List a trip's expenses, optionally filtered by category or payer."""
    trip = get_trip_or_404(trip_id, db)
    if sort not in EXPENSE_SORTS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown sort '{sort}'"
        )
    
    names = {m.id: m.display_name for m in list_members(trip_id, db)}
    expenses = filter_expenses(list_expenses(trip_id, db), category=category, paid_by=paid_by, sort=sort)
    return [
        ExpenseResponse(
            **expense.model_dump(),
            trip_id=trip_id,
            split_description=describe_split(expense, names, trip.base_currency),
        )
        for expense in expenses
    ]


@router.get("/{trip_id}/category-summary", response_model=CategorySummaryResponse)
async def get_category_summary(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """
    Get expense summary by category for a trip.
    Returns total amount spent in each category.
    """
    trip = get_trip_or_404(trip_id, db)
    return summarize_categories(list_expenses(trip_id, db), trip.base_currency)
