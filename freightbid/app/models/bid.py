"""
Bid (RFP event) database model.
"""

from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Enum
from sqlalchemy.sql import func
from freightbid.app.db.session import Base
from freightbid.app.models.enums import BidStatus


class Bid(Base):
    """
    A single procurement event with invited carriers and routes.

    `equipment_type` selects the national average used for comparison.
    """
    __tablename__ = "bids"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    organization_id = Column(Integer, ForeignKey('organizations.id'), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    status = Column(Enum(BidStatus), default=BidStatus.DRAFT, nullable=False, index=True)
    equipment_type = Column(String(50), nullable=True)
    mode = Column(String(50), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Bid(id={self.id}, name='{self.name}', status='{self.status.value}')>"
