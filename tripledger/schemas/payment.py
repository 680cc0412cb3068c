"""
Pydantic schemas for recorded payments.
"""
from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal
from tripledger.core.exceptions import PaymentValidationError
from tripledger.core.tolerance import has_minor_unit_precision
from tripledger.schemas.common import WireModel
from tripledger.schemas.validators import normalize_currency


class RecordedPayment(WireModel):
    """A real-world transfer that already happened. Append-only."""
    id: str
    from_user_id: str
    to_user_id: str
    amount: Decimal
    currency: str = ""
    date_recorded: Optional[datetime] = None
    recorded_by: str = ""
    notes: str = ""


class RecordedPaymentCreate(WireModel):
    """Schema for recording a payment, usually a confirmed settlement transaction."""
    from_user_id: str = Field(min_length=1)
    to_user_id: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    currency: Optional[str] = None  # Trip's base currency when omitted
    recorded_by: str = Field(min_length=1)
    notes: str = Field(default="", max_length=500)
    
    @field_validator("amount")
    @classmethod
    def check_amount_precision(cls, v):
        if not has_minor_unit_precision(v):
            raise PaymentValidationError("Amount must not have more than two decimal places")
        return v
    
    @field_validator("currency")
    @classmethod
    def check_currency(cls, v):
        if v is None:
            return v
        return normalize_currency(v)
    
    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v):
        return v.strip()
    
    @model_validator(mode="after")
    def check_parties(self):
        if self.from_user_id == self.to_user_id:
            raise PaymentValidationError("A payment needs two different members")
        return self
