"""
Report service: settlement summaries for display and document export.
"""
from decimal import Decimal
from typing import Iterable, List, Sequence

from tripledger.core.tolerance import ZERO, balance_status, to_minor_units
from tripledger.core.utils import format_amount
from tripledger.schemas.expense import Expense
from tripledger.schemas.settlement import (
    MemberFinancials,
    SettlementSummary,
    SettlementTransaction,
)

STATUS_LABELS = {"owed": "Owed", "owes": "Owes", "settled": "Settled"}


def balance_label(net_balance: Decimal) -> str:
    """Owed / Owes / Settled, using the shared tolerance."""
    return STATUS_LABELS[balance_status(net_balance)]


def build_settlement_summary(
    financials: Sequence[MemberFinancials],
    transactions: Sequence[SettlementTransaction],
    expenses: Iterable[Expense],
    base_currency: str = "",
) -> SettlementSummary:
    """Collect balances, transfers and totals; the text report is filled in too."""
    summary = SettlementSummary(
        net_balances={f.member_id: f.net_balance for f in financials},
        transfers=list(transactions),
        total_expenses=sum((e.amount for e in expenses), Decimal(0)),
        participant_count=len(financials),
        base_currency=base_currency,
    )
    summary.summary_text = format_summary_text(summary, financials)
    return summary


def format_summary_text(summary: SettlementSummary, financials: Sequence[MemberFinancials]) -> str:
    """Plain-text settlement report."""
    currency = summary.base_currency
    summary_lines: List[str] = []
    summary_lines.append(f"Total expenses: {format_amount(summary.total_expenses, currency)}")
    summary_lines.append(f"Participants: {summary.participant_count}")

    summary_lines.append("\nNet balances:")
    for row in financials:
        status = balance_status(row.net_balance)
        net_value = ZERO if status == "settled" else to_minor_units(row.net_balance)
        net = f"{net_value:+.2f}"
        if currency:
            net = f"{currency} {net}"
        summary_lines.append(
            f"  {row.member_name}: paid {format_amount(row.total_paid, currency)}, "
            f"share {format_amount(row.total_share, currency)}, "
            f"net {net} ({STATUS_LABELS[status]})"
        )

    summary_lines.append("\nTransfers:")
    if not summary.transfers:
        summary_lines.append("  All outstanding debts are settled.")
    for transfer in summary.transfers:
        summary_lines.append(
            f"  {transfer.from_name} -> {transfer.to_name}: {format_amount(transfer.amount, currency)}"
        )
    return "\n".join(summary_lines)
