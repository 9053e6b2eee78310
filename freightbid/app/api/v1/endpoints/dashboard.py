"""
Dashboard API Endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from freightbid.app.core.config import settings
from freightbid.app.core.dependencies import SessionContext
from freightbid.app.core.guards import require_organization_member
from freightbid.app.db.session import get_db
from freightbid.app.services.cache import QueryCache, get_query_cache, query_key
from freightbid.app.services.dashboard_stats import get_dashboard_stats
from freightbid.app.schemas.analytics import DashboardStats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    session: SessionContext = Depends(require_organization_member()),
    cache: QueryCache = Depends(get_query_cache),
    db: AsyncSession = Depends(get_db)
):
    """Carrier, active bid and route counts for the caller's organization."""
    return await cache.fetch(
        query_key(session.user_id, "dashboard-stats"),
        lambda: get_dashboard_stats(db, session.organization_id),
        ttl_seconds=settings.dashboard_cache_ttl_seconds,
        on_retry=db.rollback,
    )
