"""
National route average reference values.
"""

from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from freightbid.app.db.session import Base


class NationalRouteAverage(Base):
    """
    External per-mile reference rate for an equipment type.

    A null `bid_id` marks the global figure used for comparisons.
    """
    __tablename__ = "national_route_averages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    equipment_type = Column(String(50), nullable=False, index=True)
    value = Column(Float, nullable=False)
    bid_id = Column(Integer, ForeignKey('bids.id'), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<NationalRouteAverage(equipment='{self.equipment_type}', value={self.value}, bid_id={self.bid_id})>"
