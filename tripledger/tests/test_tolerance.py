"""
Tests for the shared tolerance rules.
"""
import pytest
from decimal import Decimal
from tripledger import SETTLEMENT_TOLERANCE
from tripledger.core.exceptions import SplitValidationError
from tripledger.core.tolerance import (
    amounts_match,
    balance_status,
    has_minor_unit_precision,
    is_credit,
    is_debt,
    is_settled,
    to_decimal,
    to_minor_units,
    validate_unequal_split,
)


def test_tolerance_is_half_a_minor_unit():
    assert SETTLEMENT_TOLERANCE == Decimal("0.005")


def test_to_decimal_drops_float_noise():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("12.50") == Decimal("12.50")
    assert to_decimal(3) == Decimal(3)


def test_boundary_counts_as_settled():
    assert is_settled(Decimal("0.005"))
    assert is_settled(Decimal("-0.005"))
    assert not is_settled(Decimal("0.0051"))
    assert is_credit(Decimal("0.0051"))
    assert is_debt(Decimal("-0.0051"))
    assert not is_credit(Decimal("0.005"))
    assert not is_debt(Decimal("-0.005"))


def test_balance_status():
    assert balance_status(Decimal("12")) == "owed"
    assert balance_status(Decimal("-12")) == "owes"
    assert balance_status(Decimal("0.004")) == "settled"


def test_amounts_match():
    assert amounts_match(Decimal("99.999"), Decimal("100"))
    assert not amounts_match(Decimal("99.99"), Decimal("100"))


def test_validate_unequal_split_accepts_matching_shares():
    shares = validate_unequal_split(
        Decimal("100"),
        ["a", "b", "c"],
        {"a": Decimal("33.33"), "b": Decimal("33.33"), "c": Decimal("33.34")},
    )
    assert shares == {"a": Decimal("33.33"), "b": Decimal("33.33"), "c": Decimal("33.34")}


def test_validate_unequal_split_ignores_non_participants():
    shares = validate_unequal_split(
        Decimal("50"),
        ["a", "b"],
        {"a": Decimal("20"), "b": Decimal("30"), "z": Decimal("999")},
    )
    assert set(shares) == {"a", "b"}


@pytest.mark.parametrize("shares", [
    {"a": Decimal("20")},  # b missing
    {"a": Decimal("60"), "b": Decimal("-10")},  # negative
    {"a": Decimal("20"), "b": Decimal("20")},  # sums to 40
    {"a": Decimal("25.005"), "b": Decimal("24.995")},  # below a cent
])
def test_validate_unequal_split_rejects(shares):
    with pytest.raises(SplitValidationError):
        validate_unequal_split(Decimal("50"), ["a", "b"], shares)


def test_minor_units():
    assert has_minor_unit_precision(Decimal("33.30"))
    assert has_minor_unit_precision(12)
    assert not has_minor_unit_precision(Decimal("33.334"))
    assert to_minor_units(Decimal("100") / 3) == Decimal("33.33")
    assert to_minor_units(Decimal("0.005")) == Decimal("0.01")
