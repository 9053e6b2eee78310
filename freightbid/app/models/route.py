"""
Route (lane) database model.

A route is an origin-destination-equipment lane. Routes are immutable once
created except for the soft-deletion flag.
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from freightbid.app.db.session import Base


class Route(Base):
    """
    Route model.

    `distance` is nullable; a per-mile rate exists only when it is positive.
    """
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    organization_id = Column(Integer, ForeignKey('organizations.id'), nullable=False, index=True)

    origin_city = Column(String(200), nullable=False)
    destination_city = Column(String(200), nullable=False)
    equipment_type = Column(String(50), nullable=False, index=True)
    commodity = Column(String(200), nullable=False)
    weekly_volume = Column(Integer, default=0, nullable=False)
    distance = Column(Float, nullable=True)

    is_deleted = Column(Boolean, default=False, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Route(id={self.id}, {self.origin_city} -> {self.destination_city}, equipment='{self.equipment_type}')>"
