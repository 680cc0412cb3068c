"""
Trip and membership models.
"""
from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from tripledger.db.base import BaseModel


class Trip(BaseModel):
    """Trip model grouping members, expenses and payments."""
    __tablename__ = "trips"
    
    name = Column(String(200), nullable=False)
    base_currency = Column(String(3), nullable=False, default="INR")
    
    # Relationships
    members = relationship("TripMember", back_populates="trip", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="trip", cascade="all, delete-orphan")
    payments = relationship("RecordedPayment", back_populates="trip", cascade="all, delete-orphan")


class TripMember(BaseModel):
    """A member of one trip; the id is the key used in all balance bookkeeping."""
    __tablename__ = "trip_members"
    
    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True)
    
    # Relationships
    trip = relationship("Trip", back_populates="members")
