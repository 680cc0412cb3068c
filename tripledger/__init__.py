"""
tripledger - group expense ledger and debt settlement engine.

Typical use::

    financials = aggregate(members, expenses, payments)
    plan = settle(financials)
"""
from tripledger.core.tolerance import SETTLEMENT_TOLERANCE
from tripledger.services.ledger_service import aggregate
from tripledger.services.settlement_service import settle, compute_settlement

__version__ = "1.0.0"

__all__ = [
    "SETTLEMENT_TOLERANCE",
    "aggregate",
    "settle",
    "compute_settlement",
]
