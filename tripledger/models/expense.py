"""
Expense model for tracking shared spending.
"""
from sqlalchemy import Column, String, Numeric, Date, ForeignKey, Integer, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from tripledger.db.base import BaseModel
from tripledger.schemas.expense import SplitType


class Expense(BaseModel):
    """Expense model representing a single shared cost."""
    __tablename__ = "expenses"
    
    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=False, index=True)
    # Not a foreign key: the payer may since have left the trip
    paid_by = Column(String(36), nullable=False, index=True)
    date = Column(Date, nullable=True, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    category = Column(String(50), nullable=False, default="Miscellaneous")
    description = Column(String(100), nullable=False, default="")
    notes = Column(Text, nullable=True)
    split_type = Column(SQLEnum(SplitType), nullable=False, default=SplitType.EQUALLY)
    
    # Relationships
    trip = relationship("Trip", back_populates="expenses")
    participants = relationship("ExpenseParticipant", back_populates="expense", cascade="all, delete-orphan")


class ExpenseParticipant(BaseModel):
    """One participant of an expense, with an explicit share for unequal splits."""
    __tablename__ = "expense_participants"
    
    expense_id = Column(String(36), ForeignKey("expenses.id"), nullable=False, index=True)
    member_id = Column(String(36), nullable=False, index=True)
    share_amount = Column(Numeric(15, 2), nullable=True)  # Only set for unequal splits
    position = Column(Integer, nullable=False, default=0)  # Order as entered
    
    # Relationships
    expense = relationship("Expense", back_populates="participants")
