"""
Carrier database model.

Only the fields the analytics layer reads are modelled here; onboarding
details (documents, fleet, billing) live with the onboarding forms.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from freightbid.app.db.session import Base
from freightbid.app.models.enums import CarrierStatus


class Carrier(Base):
    """A trucking company invited to quote on bids."""
    __tablename__ = "carriers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    organization_id = Column(Integer, ForeignKey('organizations.id'), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    contact_email = Column(String(255), nullable=True)
    status = Column(Enum(CarrierStatus), default=CarrierStatus.PENDING, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Carrier(id={self.id}, name='{self.name}')>"
