"""
Pydantic schemas for trip members.
"""
from pydantic import Field
from typing import Optional
from tripledger.schemas.common import WireModel


class Member(WireModel):
    """Identity key for all balance bookkeeping."""
    id: str
    display_name: str = ""
    email: Optional[str] = None


class MemberCreate(WireModel):
    """Schema for adding a member to a trip."""
    id: Optional[str] = None  # Generated when omitted
    display_name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
