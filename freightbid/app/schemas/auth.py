"""
Authentication Pydantic schemas.

Defines request and response schemas for authentication endpoints.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from datetime import datetime
from typing import Optional
from freightbid.app.models.enums import UserRole


class UserRegister(BaseModel):
    """
    Schema for user registration.

    A MANAGER registers a new organization; an ANALYST joins an existing one.
    """
    email: EmailStr = Field(..., description="User email address")
    username: str = Field(..., min_length=3, max_length=50, description="Unique username")
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")
    full_name: Optional[str] = Field(default=None, max_length=200)
    role: UserRole = Field(default=UserRole.ANALYST, description="User role (defaults to ANALYST)")
    organization_name: str = Field(..., min_length=2, max_length=200, description="Organization to create or join")


class UserLogin(BaseModel):
    """
    Schema for user login.

    Supports login with either username or email.
    """
    username: str = Field(..., description="Username or email")
    password: str = Field(..., description="Password")


class TokenResponse(BaseModel):
    """Returned by successful login/register operations."""
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user_id: int
    username: str
    email: str
    role: UserRole
    organization_id: Optional[int] = None


class LogoutResponse(BaseModel):
    revoked: bool
    cache_entries_cleared: int


class UserResponse(BaseModel):
    """Used by GET /auth/me."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    full_name: Optional[str] = None
    role: UserRole
    organization_id: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
