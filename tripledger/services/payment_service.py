"""
Payment service: appends recorded payments and queries the payment history.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Tuple

from sqlalchemy.orm import Session

from tripledger.core.exceptions import PaymentValidationError
from tripledger.core.tolerance import to_minor_units
from tripledger.core.utils import member_display_name
from tripledger.models.payment import RecordedPayment as PaymentRow
from tripledger.models.trip import TripMember
from tripledger.schemas.payment import RecordedPayment, RecordedPaymentCreate
from tripledger.schemas.settlement import SettlementTransaction
from tripledger.schemas.validators import normalize_currency
from tripledger.services.snapshot_service import get_trip, payment_from_row

logger = logging.getLogger(__name__)

PAYMENT_SORTS = ("date-desc", "date-asc", "amount-desc", "amount-asc")


def payment_from_transaction(
    transaction: SettlementTransaction,
    recorded_by: str,
    notes: str = "",
) -> RecordedPaymentCreate:
    """Build the payment that confirms a suggested settlement transaction, rounded to cents."""
    return RecordedPaymentCreate(
        from_user_id=transaction.from_user_id,
        to_user_id=transaction.to_user_id,
        amount=to_minor_units(transaction.amount),
        recorded_by=recorded_by,
        notes=notes,
    )


def record_payment(trip_id: str, payment_data: RecordedPaymentCreate, db: Session) -> RecordedPayment:
    """
    Append a recorded payment to a trip.

    Both parties must be trip members. The payment is stored in the trip's
    base currency unless one was given.
    """
    trip = get_trip(trip_id, db)
    try:
        base_currency = normalize_currency(trip.base_currency)
    except ValueError:
        logger.error(f"Trip {trip_id} has an invalid base currency '{trip.base_currency}'")
        raise PaymentValidationError(
            f"The base currency ('{trip.base_currency or 'Not set'}') for this trip is not set up correctly"
        )

    member_ids = {
        row.id for row in db.query(TripMember.id).filter(TripMember.trip_id == trip_id).all()
    }
    for role, member_id in (("Payer", payment_data.from_user_id), ("Recipient", payment_data.to_user_id)):
        if member_id not in member_ids:
            raise PaymentValidationError(f"{role} {member_id} is not a member of this trip")

    payment = PaymentRow(
        trip_id=trip_id,
        from_user_id=payment_data.from_user_id,
        to_user_id=payment_data.to_user_id,
        amount=payment_data.amount,
        currency=payment_data.currency or base_currency,
        recorded_by=payment_data.recorded_by,
        notes=payment_data.notes or None,
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)

    logger.info(
        f"Trip {trip_id}: recorded payment {payment.id} "
        f"{payment.from_user_id} -> {payment.to_user_id} {payment.amount} {payment.currency}"
    )
    return payment_from_row(payment)


def list_payments(trip_id: str, db: Session) -> List[RecordedPayment]:
    """All recorded payments of a trip, oldest first."""
    get_trip(trip_id, db)
    rows = db.query(PaymentRow).filter(
        PaymentRow.trip_id == trip_id
    ).order_by(PaymentRow.date_recorded, PaymentRow.id).all()
    return [payment_from_row(row) for row in rows]


def filter_payments(
    payments: Iterable[RecordedPayment],
    recorded_by: Optional[str] = None,
    sort: str = "date-desc",
) -> List[RecordedPayment]:
    """Filter the history by recorder, then sort. Unknown sort keys keep input order."""
    filtered = list(payments)
    if recorded_by:
        filtered = [p for p in filtered if p.recorded_by == recorded_by]

    def recorded_at(payment: RecordedPayment) -> float:
        return payment.date_recorded.timestamp() if payment.date_recorded else 0.0

    if sort == "date-desc":
        filtered.sort(key=recorded_at, reverse=True)
    elif sort == "date-asc":
        filtered.sort(key=recorded_at)
    elif sort == "amount-desc":
        filtered.sort(key=lambda p: p.amount, reverse=True)
    elif sort == "amount-asc":
        filtered.sort(key=lambda p: p.amount)

    return filtered


def unique_recorders(
    payments: Iterable[RecordedPayment],
    names: Mapping[str, Optional[str]],
) -> List[Tuple[str, str]]:
    """(id, name) of everyone who recorded a payment, in first-seen order."""
    seen = []
    for payment in payments:
        if payment.recorded_by not in seen:
            seen.append(payment.recorded_by)
    return [(member_id, member_display_name(member_id, names)) for member_id in seen]
