"""
Numeric tolerance shared by the ledger aggregator and the settlement solver.

Amounts are handled as ``Decimal``. SETTLEMENT_TOLERANCE is half a minor
currency unit (half a cent) and is the only definition of "zero" used by the
package: split validation, settled/owed/owes classification and the solver's
cursor advancement all go through the helpers below.

Changing the constant changes settlement output, so it is not a setting.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Mapping, Union

from tripledger.core.exceptions import SplitValidationError

SETTLEMENT_TOLERANCE = Decimal("0.005")

Number = Union[Decimal, int, float, str]

ZERO = Decimal(0)

# Smallest amount that can be stored
MINOR_UNIT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert an amount to Decimal. Floats go through str() to drop binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def to_minor_units(value: Number) -> Decimal:
    """Round an amount to whole cents, half up."""
    return to_decimal(value).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def has_minor_unit_precision(value: Number) -> bool:
    """True if the amount has no digits below a cent."""
    value = to_decimal(value)
    return value == value.quantize(MINOR_UNIT)


def is_settled(value: Number) -> bool:
    """True if the value is zero within tolerance."""
    return abs(to_decimal(value)) <= SETTLEMENT_TOLERANCE


def is_credit(value: Number) -> bool:
    """True if a balance means the member is owed money."""
    return to_decimal(value) > SETTLEMENT_TOLERANCE


def is_debt(value: Number) -> bool:
    """True if a balance means the member owes money."""
    return to_decimal(value) < -SETTLEMENT_TOLERANCE


def amounts_match(a: Number, b: Number) -> bool:
    """True if two amounts differ by no more than the tolerance."""
    return is_settled(to_decimal(a) - to_decimal(b))


def balance_status(value: Number) -> str:
    """Classify a net balance as ``owed``, ``owes`` or ``settled``."""
    if is_credit(value):
        return "owed"
    if is_debt(value):
        return "owes"
    return "settled"


def split_total(participants: Iterable[str], shares: Mapping[str, Number]) -> Decimal:
    """Sum of shares restricted to the given participants."""
    total = ZERO
    for participant in set(participants):
        if participant in shares:
            total += to_decimal(shares[participant])
    return total


def validate_unequal_split(
    amount: Number,
    participants: Iterable[str],
    shares: Mapping[str, Number],
) -> Dict[str, Decimal]:
    """
    Check an unequal split before it is stored.

    Every participant needs a non-negative share in whole cents, and the
    participants' shares must add up to the amount within tolerance. Entries
    for non-participants are ignored.

    Returns:
        The participant shares as Decimals.

    Raises:
        SplitValidationError: if any rule is broken.
    """
    participants = list(participants)
    resolved: Dict[str, Decimal] = {}
    for participant in participants:
        if participant not in shares or shares[participant] is None:
            raise SplitValidationError(f"Missing share for participant {participant}")
        share = to_decimal(shares[participant])
        if share < 0:
            raise SplitValidationError(f"Share for participant {participant} must not be negative")
        if not has_minor_unit_precision(share):
            raise SplitValidationError(f"Share for participant {participant} has more than two decimal places")
        resolved[participant] = share

    total = split_total(participants, resolved)
    if not amounts_match(total, amount):
        raise SplitValidationError(
            f"The sum of shares for selected participants ({total}) "
            f"must equal the total expense amount ({to_decimal(amount)})"
        )
    return resolved


def check_zero_sum(balances: Iterable[Number]) -> Decimal:
    """Return the drift of a balance set from zero (sum of all balances)."""
    total = ZERO
    for value in balances:
        total += to_decimal(value)
    return total
