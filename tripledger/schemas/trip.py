"""
Pydantic schemas for Trip entity.
"""
from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime
from tripledger.schemas.common import WireModel
from tripledger.schemas.member import Member
from tripledger.schemas.validators import normalize_currency


class TripCreate(WireModel):
    """Schema for trip creation."""
    name: str = Field(min_length=1, max_length=200)
    base_currency: Optional[str] = None  # Falls back to settings.DEFAULT_CURRENCY
    
    @field_validator("base_currency")
    @classmethod
    def check_currency(cls, v):
        if v is None:
            return v
        return normalize_currency(v)


class TripResponse(WireModel):
    """Schema for trip response."""
    id: str
    name: str
    base_currency: str
    created_at: datetime


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with members."""
    members: List[Member] = []
