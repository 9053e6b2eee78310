"""
Route <-> Bid association.

Links the routes (lanes) included in a bid.
"""

from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from freightbid.app.db.session import Base


class RouteBid(Base):
    """Join table between routes and bids."""
    __tablename__ = "route_bids"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    route_id = Column(Integer, ForeignKey('routes.id'), nullable=False, index=True)
    bid_id = Column(Integer, ForeignKey('bids.id'), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint('route_id', 'bid_id', name='uq_route_bid'),
    )

    def __repr__(self):
        return f"<RouteBid(route_id={self.route_id}, bid_id={self.bid_id})>"
