"""
Pydantic schemas for derived ledger results.

Nothing here is stored; every value is recomputed from a snapshot of
members, expenses and recorded payments.
"""
from typing import Dict, List
from decimal import Decimal
from tripledger.schemas.common import WireModel


class MemberFinancials(WireModel):
    """One member's position. Positive net_balance means the member is owed money."""
    member_id: str
    member_name: str
    total_paid: Decimal
    total_share: Decimal
    initial_net_balance: Decimal  # total_paid - total_share
    net_balance: Decimal  # initial_net_balance adjusted by recorded payments


class SettlementTransaction(WireModel):
    """A suggested transfer from a debtor to a creditor."""
    from_user_id: str
    from_name: str
    to_user_id: str
    to_name: str
    amount: Decimal


class SettlementPlan(WireModel):
    """Financial rows and the suggested transfers that settle them."""
    financials: List[MemberFinancials]
    transactions: List[SettlementTransaction]


class SettlementSummary(WireModel):
    """Schema for settlement summary."""
    net_balances: Dict[str, Decimal]  # member id -> net balance
    transfers: List[SettlementTransaction]
    total_expenses: Decimal
    participant_count: int
    base_currency: str = ""
    summary_text: str = ""
