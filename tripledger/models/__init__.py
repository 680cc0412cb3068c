"""Models package - Import all models for SQLAlchemy registration."""
from tripledger.models.trip import Trip, TripMember
from tripledger.models.expense import Expense, ExpenseParticipant
from tripledger.models.payment import RecordedPayment

__all__ = [
    "Trip",
    "TripMember",
    "Expense",
    "ExpenseParticipant",
    "RecordedPayment",
]
