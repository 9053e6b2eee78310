"""
Carrier route rate (rate submission) database model.

Append-style: a resubmission inserts a row with a higher `version` instead
of updating the previous one.
"""

from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from freightbid.app.db.session import Base
from freightbid.app.models.enums import CurrencyType


class CarrierRouteRate(Base):
    """A carrier's quoted price for one route within one bid."""
    __tablename__ = "carrier_route_rates"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    bid_id = Column(Integer, ForeignKey('bids.id'), nullable=False, index=True)
    route_id = Column(Integer, ForeignKey('routes.id'), nullable=False, index=True)
    carrier_id = Column(Integer, ForeignKey('carriers.id'), nullable=False, index=True)
    response_id = Column(Integer, ForeignKey('carrier_bid_responses.id'), nullable=True)

    # Nullable: a carrier may leave a lane blank
    value = Column(Float, nullable=True)
    currency = Column(Enum(CurrencyType), default=CurrencyType.USD, nullable=False)
    comment = Column(String(1000), nullable=True)
    version = Column(Integer, default=1, nullable=False)

    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<CarrierRouteRate(id={self.id}, bid={self.bid_id}, route={self.route_id}, carrier={self.carrier_id}, value={self.value})>"
