"""
Recorded payment model. Rows are only ever inserted.
"""
from sqlalchemy import Column, String, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from tripledger.db.base import BaseModel, utc_now


class RecordedPayment(BaseModel):
    """A transfer between two members that already happened outside the app."""
    __tablename__ = "recorded_payments"
    
    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=False, index=True)
    from_user_id = Column(String(36), nullable=False, index=True)
    to_user_id = Column(String(36), nullable=False, index=True)
    amount = Column(Numeric(15, 2), nullable=False)
    currency = Column(String(3), nullable=False)
    date_recorded = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    recorded_by = Column(String(36), nullable=False)
    notes = Column(Text, nullable=True)
    
    # Relationships
    trip = relationship("Trip", back_populates="payments")
