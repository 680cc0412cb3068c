"""
Expense service for expense-related business logic.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from tripledger.core.exceptions import SplitValidationError
from tripledger.core.utils import format_amount, member_display_name
from tripledger.models.expense import Expense as ExpenseRow, ExpenseParticipant
from tripledger.models.trip import TripMember
from tripledger.schemas.expense import (
    CategoryExpenseItem,
    CategorySummaryResponse,
    Expense,
    ExpenseCreate,
    UnequalSplit,
)
from tripledger.services.snapshot_service import expense_from_row, get_trip

logger = logging.getLogger(__name__)

EXPENSE_SORTS = ("date-desc", "date-asc", "amount-desc", "amount-asc", "description-asc", "description-desc")


def create_expense(trip_id: str, expense_data: ExpenseCreate, db: Session) -> Expense:
    """
    Store a validated expense.

    The schema has already checked amounts and split sums; here the payer and
    every participant must belong to the trip.
    """
    get_trip(trip_id, db)
    member_ids = {
        row.id for row in db.query(TripMember.id).filter(TripMember.trip_id == trip_id).all()
    }
    if expense_data.paid_by not in member_ids:
        raise SplitValidationError(f"Payer {expense_data.paid_by} is not a member of this trip")
    unknown = [pid for pid in expense_data.participants if pid not in member_ids]
    if unknown:
        raise SplitValidationError(f"Participants are not members of this trip: {', '.join(unknown)}")

    expense = ExpenseRow(
        trip_id=trip_id,
        paid_by=expense_data.paid_by,
        date=expense_data.date or date.today(),
        amount=expense_data.amount,
        currency=expense_data.currency,
        category=expense_data.category,
        description=expense_data.description,
        notes=expense_data.notes or None,
        split_type=expense_data.split_type,
    )
    shares = expense_data.split_details or {}
    for position, member_id in enumerate(expense_data.participants):
        expense.participants.append(ExpenseParticipant(
            member_id=member_id,
            share_amount=shares.get(member_id),
            position=position,
        ))
    db.add(expense)
    db.commit()
    db.refresh(expense)

    logger.info(f"Trip {trip_id}: recorded expense {expense.id} of {expense.amount} {expense.currency}")
    return expense_from_row(expense)


def list_expenses(trip_id: str, db: Session) -> List[Expense]:
    """All expenses of a trip in the order they were recorded."""
    get_trip(trip_id, db)
    rows = db.query(ExpenseRow).filter(
        ExpenseRow.trip_id == trip_id
    ).order_by(ExpenseRow.created_at, ExpenseRow.id).all()
    return [expense_from_row(row) for row in rows]


def filter_expenses(
    expenses: Iterable[Expense],
    category: Optional[str] = None,
    paid_by: Optional[str] = None,
    sort: str = "date-desc",
) -> List[Expense]:
    """Filter by category and payer, then sort. Unknown sort keys keep input order."""
    filtered = list(expenses)

    if category:
        filtered = [e for e in filtered if e.category == category]
    if paid_by:
        filtered = [e for e in filtered if e.paid_by == paid_by]

    if sort == "date-desc":
        filtered.sort(key=lambda e: e.date or date.min, reverse=True)
    elif sort == "date-asc":
        filtered.sort(key=lambda e: e.date or date.min)
    elif sort == "amount-desc":
        filtered.sort(key=lambda e: e.amount, reverse=True)
    elif sort == "amount-asc":
        filtered.sort(key=lambda e: e.amount)
    elif sort == "description-asc":
        filtered.sort(key=lambda e: e.description.lower())
    elif sort == "description-desc":
        filtered.sort(key=lambda e: e.description.lower(), reverse=True)

    return filtered


def summarize_categories(expenses: Iterable[Expense], base_currency: str = "") -> CategorySummaryResponse:
    """
    Totals per category, largest first.
    Expenses without a category are counted separately.
    """
    expenses = list(expenses)
    total_expenses = sum((e.amount for e in expenses), Decimal(0))

    category_totals: Dict[str, Decimal] = {}
    category_counts: Dict[str, int] = {}
    uncategorized_total = Decimal(0)
    uncategorized_count = 0

    for expense in expenses:
        category = expense.category.strip()
        if not category:
            uncategorized_total += expense.amount
            uncategorized_count += 1
            continue
        category_totals[category] = category_totals.get(category, Decimal(0)) + expense.amount
        category_counts[category] = category_counts.get(category, 0) + 1

    category_items = []
    for category, total_amount in category_totals.items():
        percentage = float(total_amount / total_expenses * 100) if total_expenses > 0 else 0.0
        category_items.append(CategoryExpenseItem(
            category=category,
            total_amount=total_amount,
            expense_count=category_counts[category],
            percentage=percentage,
        ))

    category_items.sort(key=lambda x: (-x.total_amount, x.category))

    return CategorySummaryResponse(
        base_currency=base_currency,
        total_expenses=total_expenses,
        categories=category_items,
        uncategorized_amount=uncategorized_total,
        uncategorized_count=uncategorized_count,
    )


def describe_split(expense: Expense, names: Mapping[str, Optional[str]], currency: str = "") -> str:
    """One-line, human-readable account of who owes what for an expense."""
    if not expense.participants:
        return "N/A"
    payer_name = member_display_name(expense.paid_by, names)

    if isinstance(expense.split, UnequalSplit):
        details = ", ".join(
            f"{member_display_name(pid, names)}: {format_amount(amount, currency)}"
            for pid, amount in expense.split.shares.items()
            if amount > 0
        )
        return f"Unequal split: {details}. Paid by {payer_name}."

    if expense.participants == [expense.paid_by]:
        return f"Paid by {payer_name} for themself."
    participant_names = ", ".join(member_display_name(pid, names) for pid in expense.participants)
    share = expense.amount / len(expense.participants)
    return (
        f"Equally split between {participant_names}. "
        f"Each owes {format_amount(share, currency)} to {payer_name}."
    )
