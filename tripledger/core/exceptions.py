"""
Errors raised on the write path before anything is persisted.

The read/compute path never raises on data content; these exist so that a
caller about to store a new expense or payment can fail fast.
"""


class LedgerError(ValueError):
    """Base class for ledger input errors."""


class SplitValidationError(LedgerError):
    """An expense's split does not describe its amount."""


class PaymentValidationError(LedgerError):
    """A recorded payment is not acceptable."""


class TripNotFoundError(LedgerError):
    """Trip does not exist in the store."""
    
    def __init__(self, trip_id: str):
        super().__init__(f"Trip not found: {trip_id}")
        self.trip_id = trip_id
