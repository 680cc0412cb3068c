"""
Pydantic schemas for Expense entity.

An expense's split is resolved once, when the schema is built, into either
EqualSplit or UnequalSplit. The aggregator only ever looks at the resolved
variant.
"""
import enum
from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator
from typing import Annotated, Dict, List, Literal, Optional, Union
from datetime import date as dt_date
from decimal import Decimal
from tripledger.core.config import settings
from tripledger.core.exceptions import SplitValidationError
from tripledger.core.tolerance import has_minor_unit_precision, validate_unequal_split
from tripledger.schemas.common import WireModel
from tripledger.schemas.validators import normalize_currency, unique_ids


class SplitType(str, enum.Enum):
    """How an expense is divided among its participants."""
    EQUALLY = "equally"
    UNEQUALLY = "unequally"


class EqualSplit(BaseModel):
    """Each participant owes amount / len(participants)."""
    kind: Literal["equal"] = "equal"


class UnequalSplit(BaseModel):
    """Each participant owes an explicit share; missing entries owe nothing."""
    kind: Literal["unequal"] = "unequal"
    shares: Dict[str, Decimal] = {}


Split = Annotated[Union[EqualSplit, UnequalSplit], Field(discriminator="kind")]


def resolve_split(
    split_type: SplitType,
    participants: List[str],
    split_details: Optional[Dict[str, Decimal]],
) -> Split:
    """
    Turn the stored split fields into a Split variant.

    Unequal expenses without any split details fall back to an equal split.
    Detail entries for ids that are not participants are dropped.
    """
    if split_type == SplitType.UNEQUALLY and split_details is not None:
        members = set(participants)
        shares = {pid: amount for pid, amount in split_details.items() if pid in members}
        return UnequalSplit(shares=shares)
    return EqualSplit()


class Expense(WireModel):
    """
    Expense as read from the store.

    No sum checks here: a historical record that no longer adds up must still
    load so the ledger stays computable.
    """
    id: str
    amount: Decimal
    currency: str = ""
    paid_by: str
    category: str = ""
    participants: List[str] = []
    split_type: SplitType = SplitType.EQUALLY
    split_details: Optional[Dict[str, Decimal]] = None
    description: str = ""
    date: Optional[dt_date] = None
    notes: str = ""

    @field_validator("participants")
    @classmethod
    def dedupe_participants(cls, v):
        return unique_ids(v)

    _split: Split = PrivateAttr(default_factory=EqualSplit)

    def model_post_init(self, __context):
        self._split = resolve_split(self.split_type, self.participants, self.split_details)

    @property
    def split(self) -> Split:
        return self._split


class ExpenseCreate(WireModel):
    """Schema for expense creation. Rejects splits that do not describe the amount."""
    amount: Decimal = Field(gt=0)
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    paid_by: str = Field(min_length=1)
    category: str = Field(default="Miscellaneous", min_length=1)
    participants: List[str] = Field(min_length=1)
    split_type: SplitType = SplitType.EQUALLY
    split_details: Optional[Dict[str, Optional[Decimal]]] = None
    description: str = Field(min_length=1, max_length=100)
    date: Optional[dt_date] = None
    notes: str = Field(default="", max_length=500)

    @field_validator("amount")
    @classmethod
    def check_amount_precision(cls, v):
        if not has_minor_unit_precision(v):
            raise SplitValidationError("Amount must not have more than two decimal places")
        return v

    @field_validator("currency")
    @classmethod
    def check_currency(cls, v):
        return normalize_currency(v)

    @field_validator("participants")
    @classmethod
    def dedupe_participants(cls, v):
        return unique_ids(v)

    @model_validator(mode="after")
    def check_split(self):
        if self.split_type == SplitType.UNEQUALLY:
            if not self.split_details:
                raise SplitValidationError("Unequal split requires a share for each participant")
            # Keep only the participants' shares
            self.split_details = validate_unequal_split(self.amount, self.participants, self.split_details)
        else:
            self.split_details = None
        return self


class ExpenseResponse(Expense):
    """Schema for expense response."""
    trip_id: str
    split_description: str = ""


class CategoryExpenseItem(WireModel):
    """Schema for category expense item in summary."""
    category: str
    total_amount: Decimal
    expense_count: int
    percentage: float  # Percentage of total expenses (0-100)


class CategorySummaryResponse(WireModel):
    """Schema for category summary response."""
    base_currency: str
    total_expenses: Decimal
    categories: List[CategoryExpenseItem]
    uncategorized_amount: Decimal
    uncategorized_count: int
