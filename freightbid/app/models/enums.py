"""
Shared enumerations for the freight bid domain.
"""

import enum


class UserRole(str, enum.Enum):
    """
    User role enumeration.

    Roles:
        ADMIN: System-level operator (never created via API)
        MANAGER: Runs bids for an organization; creates the organization on sign-up
        ANALYST: Read-only member of an existing organization
    """
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    ANALYST = "ANALYST"


class BidStatus(str, enum.Enum):
    """Bid (RFP event) lifecycle status."""
    DRAFT = "draft"
    ACTIVE = "active"
    CLOSED = "closed"


class CarrierStatus(str, enum.Enum):
    """Carrier onboarding status."""
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


class InvitationStatus(str, enum.Enum):
    """
    Bid invitation status.

    PENDING: Created, not yet sent
    DELIVERED: Sent through at least one channel
    OPENED: Carrier opened the invitation link
    RESPONDED: Carrier submitted rates
    REVOKED: Invitation withdrawn by the shipper
    """
    PENDING = "pending"
    DELIVERED = "delivered"
    OPENED = "opened"
    RESPONDED = "responded"
    REVOKED = "revoked"


class CurrencyType(str, enum.Enum):
    """Currencies a carrier may quote in. Values are never converted."""
    USD = "USD"
    MXN = "MXN"
    CAD = "CAD"
