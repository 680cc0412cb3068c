"""
Settlement service for suggesting the transfers that clear all balances.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence

from sqlalchemy.orm import Session

from tripledger.core.tolerance import (
    SETTLEMENT_TOLERANCE,
    check_zero_sum,
    is_credit,
    is_debt,
    is_settled,
)
from tripledger.schemas.expense import Expense
from tripledger.schemas.member import Member
from tripledger.schemas.payment import RecordedPayment
from tripledger.schemas.settlement import (
    MemberFinancials,
    SettlementPlan,
    SettlementTransaction,
)
from tripledger.services.ledger_service import aggregate
from tripledger.services.snapshot_service import load_trip_snapshot

logger = logging.getLogger(__name__)


@dataclass
class _Position:
    """Working copy of a member's balance while the plan is built."""
    member_id: str
    name: str
    balance: Decimal


def _check_zero_sum(financials: Sequence[MemberFinancials]) -> None:
    """Warn when balances do not cancel out, e.g. after a payer left the trip."""
    drift = check_zero_sum(f.net_balance for f in financials)
    if abs(drift) > SETTLEMENT_TOLERANCE * max(len(financials), 1):
        logger.warning(f"Net balances do not sum to zero (drift {drift}); plan will leave a remainder")


def settle(financials: Sequence[MemberFinancials]) -> List[SettlementTransaction]:
    """
    Suggest transfers that bring every balance to zero.

    Greedy matching: the largest debtor pays the largest creditor as much as
    either can take, then whichever side is cleared moves on. Ties are broken
    by member id so the plan is stable across calls. The number of transfers
    is at most debtors + creditors - 1; it is not guaranteed to be minimal.

    The input rows are not modified.
    """
    if not financials:
        return []
    _check_zero_sum(financials)

    positions = [_Position(f.member_id, f.member_name, f.net_balance) for f in financials]
    # Most negative first
    debtors = sorted(
        (p for p in positions if is_debt(p.balance)),
        key=lambda p: (p.balance, p.member_id),
    )
    # Largest credit first
    creditors = sorted(
        (p for p in positions if is_credit(p.balance)),
        key=lambda p: (-p.balance, p.member_id),
    )

    transactions = []
    debt_idx = 0
    cred_idx = 0

    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor = debtors[debt_idx]
        creditor = creditors[cred_idx]

        # Transfer the minimum of what's owed and what's needed
        transfer_amount = min(-debtor.balance, creditor.balance)
        if transfer_amount > SETTLEMENT_TOLERANCE:
            transactions.append(SettlementTransaction(
                from_user_id=debtor.member_id,
                from_name=debtor.name,
                to_user_id=creditor.member_id,
                to_name=creditor.name,
                amount=transfer_amount,
            ))

        debtor.balance += transfer_amount
        creditor.balance -= transfer_amount

        if is_settled(debtor.balance):
            debt_idx += 1
        if is_settled(creditor.balance):
            cred_idx += 1

    return transactions


def compute_settlement(
    members: Sequence[Member],
    expenses: Iterable[Expense],
    payments: Iterable[RecordedPayment],
) -> SettlementPlan:
    """Aggregate a snapshot and settle it in one call."""
    financials = aggregate(members, expenses, payments)
    return SettlementPlan(financials=financials, transactions=settle(financials))


def calculate_settlement(trip_id: str, db: Session) -> SettlementPlan:
    """
    Calculate the settlement plan for a trip from a fresh snapshot.
    Nothing is written back; callers recompute after every change.
    """
    snapshot = load_trip_snapshot(trip_id, db)
    plan = compute_settlement(snapshot.members, snapshot.expenses, snapshot.payments)
    logger.info(
        f"Trip {trip_id}: {len(snapshot.expenses)} expenses, {len(snapshot.payments)} payments, "
        f"{len(plan.transactions)} suggested transfers"
    )
    return plan
