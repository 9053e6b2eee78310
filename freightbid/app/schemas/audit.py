"""
Audit log schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class AuditLogResponse(BaseModel):
    """Schema for audit log entry."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    actor_id: Optional[int] = None
    actor_username: Optional[str] = None
    action: str
    organization_id: Optional[int] = None
    meta_data: Optional[dict] = None
    ip_address: Optional[str] = None
    timestamp: datetime


class AuditTrailResponse(BaseModel):
    logs: List[AuditLogResponse]
    total: int
