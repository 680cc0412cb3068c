"""
Snapshot service: reads one trip's members, expenses and payments from the store.
"""
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.orm import Session, selectinload

from tripledger.core.exceptions import TripNotFoundError
from tripledger.models.expense import Expense as ExpenseRow
from tripledger.models.payment import RecordedPayment as PaymentRow
from tripledger.models.trip import Trip, TripMember
from tripledger.schemas.expense import Expense, SplitType
from tripledger.schemas.member import Member
from tripledger.schemas.payment import RecordedPayment


@dataclass
class LedgerSnapshot:
    """Everything the engine needs for one trip, read in a single session."""
    trip_id: str
    base_currency: str
    members: List[Member] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)
    payments: List[RecordedPayment] = field(default_factory=list)


def get_trip(trip_id: str, db: Session) -> Trip:
    """Fetch a trip or raise TripNotFoundError."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise TripNotFoundError(trip_id)
    return trip


def member_from_row(row: TripMember) -> Member:
    return Member(id=row.id, display_name=row.display_name, email=row.email)


def expense_from_row(row: ExpenseRow) -> Expense:
    """Convert a stored expense; unequal shares come from the participant rows."""
    participants = sorted(row.participants, key=lambda p: p.position)
    split_details = None
    if row.split_type == SplitType.UNEQUALLY:
        split_details = {
            p.member_id: p.share_amount
            for p in participants
            if p.share_amount is not None
        }
    return Expense(
        id=row.id,
        amount=row.amount,
        currency=row.currency,
        paid_by=row.paid_by,
        category=row.category or "",
        participants=[p.member_id for p in participants],
        split_type=row.split_type,
        split_details=split_details,
        description=row.description or "",
        date=row.date,
        notes=row.notes or "",
    )


def payment_from_row(row: PaymentRow) -> RecordedPayment:
    return RecordedPayment(
        id=row.id,
        from_user_id=row.from_user_id,
        to_user_id=row.to_user_id,
        amount=row.amount,
        currency=row.currency,
        date_recorded=row.date_recorded,
        recorded_by=row.recorded_by,
        notes=row.notes or "",
    )


def load_trip_snapshot(trip_id: str, db: Session) -> LedgerSnapshot:
    """
    Read a self-consistent snapshot of one trip.

    Rows are ordered by creation time so repeated reads feed the engine the
    same sequence.
    """
    trip = get_trip(trip_id, db)

    members = db.query(TripMember).filter(
        TripMember.trip_id == trip_id
    ).order_by(TripMember.created_at, TripMember.id).all()

    expenses = db.query(ExpenseRow).options(
        selectinload(ExpenseRow.participants)
    ).filter(
        ExpenseRow.trip_id == trip_id
    ).order_by(ExpenseRow.created_at, ExpenseRow.id).all()

    payments = db.query(PaymentRow).filter(
        PaymentRow.trip_id == trip_id
    ).order_by(PaymentRow.date_recorded, PaymentRow.id).all()

    return LedgerSnapshot(
        trip_id=trip.id,
        base_currency=trip.base_currency,
        members=[member_from_row(m) for m in members],
        expenses=[expense_from_row(e) for e in expenses],
        payments=[payment_from_row(p) for p in payments],
    )
