"""
Authentication dependencies for FastAPI.

Every protected request gets an explicit SessionContext built from its
bearer token. Signing in creates the token; signing out revokes it.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from freightbid.app.core.jwt import decode_access_token
from freightbid.app.core.token_revocation import is_token_revoked
from freightbid.app.db.session import get_db
from freightbid.app.models.enums import UserRole
from freightbid.app.models.user import User

# HTTP Bearer security scheme
security = HTTPBearer()


class SessionContext(BaseModel):
    """The signed-in caller, passed explicitly to whatever needs it."""
    user_id: int
    username: str
    role: UserRole
    organization_id: Optional[int] = None
    token: str


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> SessionContext:
    """
    FastAPI dependency for JWT authentication.

    Checks:
    1. Validates JWT token signature and expiry
    2. Rejects tokens revoked on sign-out
    3. Verifies the user still exists and is active

    Raises:
        HTTPException: 401 if authentication fails, 403 if the user is inactive
    """
    token = credentials.credentials

    payload = decode_access_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("user_id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if await is_token_revoked(token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has been revoked",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Real-time database check: membership and active flag may have changed
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    return SessionContext(
        user_id=user.id,
        username=user.username,
        role=user.role,
        organization_id=user.organization_id,
        token=token,
    )
