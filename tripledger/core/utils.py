"""
Utility functions for the application.
"""
from typing import Mapping, Optional
from decimal import Decimal

from tripledger.core.tolerance import to_minor_units


def fallback_name(member_id: str) -> str:
    """Short placeholder name for an id with no display name."""
    return member_id[:6] + "..."


def member_display_name(member_id: str, names: Mapping[str, Optional[str]]) -> str:
    """Look up a member's display name, falling back to a shortened id."""
    name = names.get(member_id)
    if name and name.strip():
        return name
    return fallback_name(member_id)


def format_amount(amount: Decimal, currency: str = "") -> str:
    """Format an amount with two decimals, prefixed by the currency code."""
    value = to_minor_units(amount)
    if currency:
        return f"{currency} {value:.2f}"
    return f"{value:.2f}"
