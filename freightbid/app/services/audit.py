"""
Audit logging service for authentication events.
"""

from typing import Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from freightbid.app.models.audit_log import AuditLog


class AuditAction:
    """Standardized audit action constants."""
    USER_CREATED = "USER_CREATED"
    ORGANIZATION_CREATED = "ORGANIZATION_CREATED"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    LOGOUT = "LOGOUT"


async def log_event(
    db: AsyncSession,
    action: str,
    actor_id: Optional[int] = None,
    actor_username: Optional[str] = None,
    organization_id: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None
) -> AuditLog:
    """
    Write one audit record and commit it.

    Args:
        db: Database session
        action: Action being performed (use AuditAction constants)
        actor_id: ID of user performing the action
        actor_username: Username of actor
        organization_id: Organization the actor belongs to
        metadata: Additional context as JSON
        ip_address: IP address of the request
    """
    audit_log = AuditLog(
        actor_id=actor_id,
        actor_username=actor_username,
        action=action,
        organization_id=organization_id,
        meta_data=metadata,
        ip_address=ip_address
    )

    db.add(audit_log)
    await db.commit()
    await db.refresh(audit_log)

    return audit_log


async def get_audit_trail(
    db: AsyncSession,
    organization_id: int,
    action: Optional[str] = None,
    limit: int = 50,
    offset: int = 0
) -> list[AuditLog]:
    """
    Retrieve an organization's audit trail, most recent first.

    Args:
        db: Database session
        organization_id: Organization whose events are listed
        action: Filter by action type
        limit: Maximum number of records to return
        offset: Number of records to skip
    """
    query = select(AuditLog).where(AuditLog.organization_id == organization_id)
    if action:
        query = query.where(AuditLog.action == action)
    query = query.order_by(desc(AuditLog.timestamp), desc(AuditLog.id)).offset(offset).limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())
