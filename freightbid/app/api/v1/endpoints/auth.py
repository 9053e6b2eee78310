"""
Authentication API endpoints.

Register, sign in, sign out and current-user info.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from freightbid.app.db.session import get_db
from freightbid.app.models.organization import Organization
from freightbid.app.models.user import User
from freightbid.app.models.enums import UserRole
from freightbid.app.schemas.auth import UserRegister, UserLogin, TokenResponse, UserResponse, LogoutResponse
from freightbid.app.core.security import get_password_hash, verify_password
from freightbid.app.core.jwt import create_access_token
from freightbid.app.core.dependencies import SessionContext, get_current_user
from freightbid.app.core.token_revocation import revoke_token
from freightbid.app.services.audit import log_event, AuditAction
from freightbid.app.services.cache import QueryCache, get_query_cache, user_scope

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_response(user: User) -> TokenResponse:
    jwt_payload = {
        "sub": user.username,
        "user_id": user.id,
        "role": user.role.value,
        "organization_id": user.organization_id
    }
    return TokenResponse(
        access_token=create_access_token(data=jwt_payload),
        token_type="bearer",
        user_id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        organization_id=user.organization_id
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_db)
):
    """
    Register a new user.

    Rules:
    - ADMIN role cannot be created via API.
    - MANAGER creates the named organization, which must not exist yet.
    - ANALYST joins the named organization, which must already exist.
    """
    if user_data.role == UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin users cannot be registered via API"
        )

    result = await db.execute(
        select(User).where(
            or_(User.username == user_data.username, User.email == user_data.email)
        )
    )
    existing_user = result.scalar_one_or_none()

    if existing_user:
        if existing_user.username == user_data.username:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username already registered"
            )
        else:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

    org_result = await db.execute(
        select(Organization).where(Organization.name == user_data.organization_name)
    )
    organization = org_result.scalar_one_or_none()
    created_organization = False

    if user_data.role == UserRole.MANAGER:
        if organization:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Organization already registered"
            )
        organization = Organization(name=user_data.organization_name)
        db.add(organization)
        await db.flush()
        created_organization = True
    elif not organization:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Organization not found"
        )

    new_user = User(
        email=user_data.email,
        username=user_data.username,
        full_name=user_data.full_name,
        hashed_password=get_password_hash(user_data.password),
        role=user_data.role,
        organization_id=organization.id,
        is_active=True
    )

    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    if created_organization:
        await log_event(
            db=db,
            action=AuditAction.ORGANIZATION_CREATED,
            actor_id=new_user.id,
            actor_username=new_user.username,
            organization_id=organization.id,
            metadata={"name": organization.name}
        )
    await log_event(
        db=db,
        action=AuditAction.USER_CREATED,
        actor_id=new_user.id,
        actor_username=new_user.username,
        organization_id=new_user.organization_id,
        metadata={"role": new_user.role.value}
    )

    return _token_response(new_user)


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: UserLogin,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Sign in and return a JWT token.

    Accepts username or email. Failed and successful attempts are audited.
    """
    ip_address = request.client.host if request.client else None

    result = await db.execute(
        select(User).where(
            or_(User.username == credentials.username, User.email == credentials.username)
        )
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        await log_event(
            db=db,
            action=AuditAction.LOGIN_FAILED,
            actor_id=user.id if user else None,
            actor_username=user.username if user else credentials.username,
            organization_id=user.organization_id if user else None,
            ip_address=ip_address,
            metadata={"reason": "Invalid password" if user else "User not found"}
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        await log_event(
            db=db,
            action=AuditAction.LOGIN_FAILED,
            actor_id=user.id,
            actor_username=user.username,
            organization_id=user.organization_id,
            ip_address=ip_address,
            metadata={"reason": "Account is inactive"}
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user account"
        )

    await log_event(
        db=db,
        action=AuditAction.LOGIN_SUCCESS,
        actor_id=user.id,
        actor_username=user.username,
        organization_id=user.organization_id,
        ip_address=ip_address
    )

    return _token_response(user)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    session: SessionContext = Depends(get_current_user),
    cache: QueryCache = Depends(get_query_cache),
    db: AsyncSession = Depends(get_db)
):
    """
    Sign out: revoke the bearer token and drop the caller's cached queries.
    """
    revoked = await revoke_token(session.token, session.user_id)
    cleared = await cache.invalidate_prefix(user_scope(session.user_id))

    await log_event(
        db=db,
        action=AuditAction.LOGOUT,
        actor_id=session.user_id,
        actor_username=session.username,
        organization_id=session.organization_id,
        metadata={"token_revoked": revoked}
    )

    return LogoutResponse(revoked=revoked, cache_entries_cleared=cleared)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    session: SessionContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Current authenticated user."""
    result = await db.execute(select(User).where(User.id == session.user_id))
    user = result.scalar_one_or_none()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return UserResponse.model_validate(user)
