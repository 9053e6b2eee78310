"""
Organization database model.

Every user, carrier, route and bid belongs to exactly one organization.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from freightbid.app.db.session import Base


class Organization(Base):
    """Shipper organization owning bids, routes and carrier relationships."""
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Organization(id={self.id}, name='{self.name}')>"
