"""
Audit Log Database Model.

Tracks authentication events for security monitoring.
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from freightbid.app.db.session import Base


class AuditLog(Base):
    """
    Audit log model for tracking security events.

    Events logged:
    - USER_CREATED / ORGANIZATION_CREATED
    - LOGIN_SUCCESS / LOGIN_FAILED
    - LOGOUT (token revoked on sign-out)
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Who performed the action (None for unknown users on failed login)
    actor_id = Column(Integer, index=True, nullable=True)
    actor_username = Column(String(100), nullable=True)

    action = Column(String(100), nullable=False, index=True)

    organization_id = Column(Integer, index=True, nullable=True)

    # Additional context (JSON for flexibility)
    meta_data = Column(JSON, nullable=True)

    ip_address = Column(String(50), nullable=True)

    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action='{self.action}', actor={self.actor_username})>"
