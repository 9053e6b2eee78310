"""
Security guards for role-based and organization-scoped access control.
"""

from typing import List
from fastapi import Depends, HTTPException, status
from freightbid.app.models.enums import UserRole
from freightbid.app.core.dependencies import SessionContext, get_current_user
from freightbid.app.core.exceptions import InsufficientPermissionsError


def require_role(allowed_roles: List[UserRole]):
    """
    Dependency factory for role-based access control.

    Usage:
        @router.get("/dashboard/stats")
        async def stats(session: SessionContext = Depends(require_role([UserRole.MANAGER]))):
            ...

    Raises:
        HTTPException 403 if the caller's role is not in allowed_roles
    """
    async def role_checker(session: SessionContext = Depends(get_current_user)) -> SessionContext:
        if session.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required role: {', '.join([r.value for r in allowed_roles])}"
            )
        return session

    return role_checker


def require_organization_member(allowed_roles: List[UserRole] = None):
    """
    Like require_role, and the caller must also belong to an organization.

    Analytics reads are always scoped to that organization.
    """
    allowed_roles = allowed_roles or [UserRole.MANAGER, UserRole.ANALYST]
    role_checker = require_role(allowed_roles)

    async def member_checker(session: SessionContext = Depends(role_checker)) -> SessionContext:
        if session.organization_id is None:
            raise InsufficientPermissionsError("User does not belong to an organization")
        return session

    return member_checker
