"""
Bid invitation and carrier response models.

Both tables are only counted by the analytics layer; they are joined to
each other by bid id alone.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from freightbid.app.db.session import Base
from freightbid.app.models.enums import InvitationStatus


class BidCarrierInvitation(Base):
    """A carrier invited to quote on a bid."""
    __tablename__ = "bid_carrier_invitations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    bid_id = Column(Integer, ForeignKey('bids.id'), nullable=False, index=True)
    carrier_id = Column(Integer, ForeignKey('carriers.id'), nullable=False, index=True)

    status = Column(Enum(InvitationStatus), default=InvitationStatus.PENDING, nullable=False, index=True)
    custom_message = Column(String(2000), nullable=True)

    invited_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<BidCarrierInvitation(id={self.id}, bid_id={self.bid_id}, carrier_id={self.carrier_id}, status='{self.status.value}')>"


class CarrierBidResponse(Base):
    """
    A carrier's submission envelope for a bid.

    Resubmissions add a row with a higher `version`; drafts are saved with
    `is_draft` set and are not counted as responses.
    """
    __tablename__ = "carrier_bid_responses"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    bid_id = Column(Integer, ForeignKey('bids.id'), nullable=False, index=True)
    carrier_id = Column(Integer, ForeignKey('carriers.id'), nullable=False, index=True)
    invitation_id = Column(Integer, ForeignKey('bid_carrier_invitations.id'), nullable=True)

    responder_name = Column(String(200), nullable=False)
    responder_email = Column(String(255), nullable=False)
    is_draft = Column(Boolean, default=False, nullable=False)
    version = Column(Integer, default=1, nullable=False)
    routes_submitted = Column(Integer, default=0, nullable=False)

    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<CarrierBidResponse(id={self.id}, bid_id={self.bid_id}, carrier_id={self.carrier_id}, v{self.version})>"
