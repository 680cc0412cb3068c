"""
Ledger service: folds expenses and recorded payments into member balances.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from tripledger.core.utils import member_display_name
from tripledger.schemas.expense import Expense, UnequalSplit
from tripledger.schemas.member import Member
from tripledger.schemas.payment import RecordedPayment
from tripledger.schemas.settlement import MemberFinancials

logger = logging.getLogger(__name__)


@dataclass
class _Totals:
    paid: Decimal = field(default_factory=Decimal)
    share: Decimal = field(default_factory=Decimal)
    adjustment: Decimal = field(default_factory=Decimal)


def expense_shares(expense: Expense) -> Dict[str, Decimal]:
    """
    Amount owed by each participant of one expense.

    Unequal splits give each participant their own entry (absent entries owe
    nothing). Equal splits divide the amount by the number of participants.
    """
    split = expense.split
    if isinstance(split, UnequalSplit):
        return {
            participant: split.shares[participant]
            for participant in expense.participants
            if participant in split.shares
        }

    if not expense.participants:
        return {}
    share_per_participant = expense.amount / len(expense.participants)
    return {participant: share_per_participant for participant in expense.participants}


def aggregate(
    members: Sequence[Member],
    expenses: Iterable[Expense],
    payments: Iterable[RecordedPayment],
) -> List[MemberFinancials]:
    """
    Compute each member's financial position.

    References to ids that are not members (a payer who left the trip, a
    payment to a removed member) are skipped rather than treated as errors,
    so one stale record cannot make the whole ledger uncomputable.

    Returns:
        One MemberFinancials per member, by net balance descending, ties by
        member id ascending.
    """
    if not members:
        return []

    totals: Dict[str, _Totals] = {member.id: _Totals() for member in members}
    names = {member.id: member.display_name for member in members}

    for expense in expenses:
        payer = totals.get(expense.paid_by)
        if payer is not None:
            payer.paid += expense.amount
        else:
            logger.debug(f"Expense {expense.id}: payer {expense.paid_by} is not a member, skipping paid amount")

        for participant, share in expense_shares(expense).items():
            if participant in totals:
                totals[participant].share += share
            else:
                logger.debug(f"Expense {expense.id}: participant {participant} is not a member, skipping share")

    # Payments: the sender's debt shrinks, the receiver's credit shrinks
    for payment in payments:
        if payment.from_user_id in totals:
            totals[payment.from_user_id].adjustment += payment.amount
        if payment.to_user_id in totals:
            totals[payment.to_user_id].adjustment -= payment.amount
        if payment.from_user_id not in totals or payment.to_user_id not in totals:
            logger.debug(f"Payment {payment.id} references a non-member, applied to known side only")

    financials = []
    for member_id, member_totals in totals.items():
        initial_net = member_totals.paid - member_totals.share
        financials.append(MemberFinancials(
            member_id=member_id,
            member_name=member_display_name(member_id, names),
            total_paid=member_totals.paid,
            total_share=member_totals.share,
            initial_net_balance=initial_net,
            net_balance=initial_net + member_totals.adjustment,
        ))

    financials.sort(key=lambda f: f.member_id)
    financials.sort(key=lambda f: f.net_balance, reverse=True)
    return financials
