"""
Audit Log API Endpoints.

Security events for the caller's organization, newest first.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from freightbid.app.core.dependencies import SessionContext
from freightbid.app.core.guards import require_organization_member
from freightbid.app.db.session import get_db
from freightbid.app.schemas.audit import AuditLogResponse, AuditTrailResponse
from freightbid.app.services.audit import get_audit_trail

router = APIRouter(prefix="/audit-logs", tags=["Audit"])


@router.get("", response_model=AuditTrailResponse)
async def list_audit_logs(
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    action: Optional[str] = Query(None, description="Filter by action type"),
    session: SessionContext = Depends(require_organization_member()),
    db: AsyncSession = Depends(get_db)
):
    """
    Audit trail for the caller's organization.

    Not cached: entries are appended by every sign-in and sign-out.
    """
    logs = await get_audit_trail(
        db=db,
        organization_id=session.organization_id,
        action=action,
        limit=limit,
        offset=offset
    )

    return AuditTrailResponse(
        logs=[AuditLogResponse.model_validate(log) for log in logs],
        total=len(logs)
    )
