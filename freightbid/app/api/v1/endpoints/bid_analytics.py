"""
Bid Analytics API Endpoints.

Read-only analytics for a single bid, scoped to the caller's organization.
Results go through the application query cache, which retries failing
reads a fixed number of times.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from freightbid.app.core.config import settings
from freightbid.app.core.dependencies import SessionContext
from freightbid.app.core.guards import require_organization_member
from freightbid.app.db.session import get_db
from freightbid.app.services.bid_analytics import BidAnalyticsService
from freightbid.app.services.cache import QueryCache, get_query_cache, query_key
from freightbid.app.schemas.analytics import (
    BidParticipationStats, RouteAnalytics, CostDistributionBucket,
    AverageRateAnalytics, NationalAverageResponse,
)

router = APIRouter(prefix="/bids/{bid_id}/analytics", tags=["Bid Analytics"])
reference_router = APIRouter(prefix="/national-averages", tags=["Reference Data"])


@router.get("/participation", response_model=BidParticipationStats)
async def get_participation(
    bid_id: int,
    session: SessionContext = Depends(require_organization_member()),
    cache: QueryCache = Depends(get_query_cache),
    db: AsyncSession = Depends(get_db)
):
    """Invited vs. responded carriers and the response rate."""
    await BidAnalyticsService.get_bid(db, bid_id, session.organization_id)
    return await cache.fetch(
        query_key(session.user_id, "bid", bid_id, "participation"),
        lambda: BidAnalyticsService.get_bid_participation_stats(db, bid_id),
        ttl_seconds=settings.analytics_cache_ttl_seconds,
        on_retry=db.rollback,
    )


@router.get("/routes", response_model=List[RouteAnalytics])
async def get_route_analytics(
    bid_id: int,
    session: SessionContext = Depends(require_organization_member()),
    cache: QueryCache = Depends(get_query_cache),
    db: AsyncSession = Depends(get_db)
):
    """Per-route best rate, tied carriers, average and response count."""
    await BidAnalyticsService.get_bid(db, bid_id, session.organization_id)
    return await cache.fetch(
        query_key(session.user_id, "bid", bid_id, "routes"),
        lambda: BidAnalyticsService.get_route_analytics(db, bid_id),
        ttl_seconds=settings.analytics_cache_ttl_seconds,
        on_retry=db.rollback,
    )


@router.get("/cost-distribution", response_model=List[CostDistributionBucket])
async def get_cost_distribution(
    bid_id: int,
    session: SessionContext = Depends(require_organization_member()),
    cache: QueryCache = Depends(get_query_cache),
    db: AsyncSession = Depends(get_db)
):
    """Per-mile rate histogram in $0.10 buckets."""
    await BidAnalyticsService.get_bid(db, bid_id, session.organization_id)
    return await cache.fetch(
        query_key(session.user_id, "bid", bid_id, "cost-distribution"),
        lambda: BidAnalyticsService.get_cost_distribution(db, bid_id),
        ttl_seconds=settings.analytics_cache_ttl_seconds,
        on_retry=db.rollback,
    )


@router.get("/average-rate", response_model=AverageRateAnalytics)
async def get_average_rate(
    bid_id: int,
    session: SessionContext = Depends(require_organization_member()),
    cache: QueryCache = Depends(get_query_cache),
    db: AsyncSession = Depends(get_db)
):
    """Distance-weighted per-mile average compared with the national average."""
    bid = await BidAnalyticsService.get_bid(db, bid_id, session.organization_id)
    equipment_type = bid.equipment_type
    return await cache.fetch(
        query_key(session.user_id, "bid", bid_id, "average-rate"),
        lambda: BidAnalyticsService.get_average_rate_analytics(db, bid_id, equipment_type),
        ttl_seconds=settings.analytics_cache_ttl_seconds,
        on_retry=db.rollback,
    )


@reference_router.get("/{equipment_type}", response_model=NationalAverageResponse)
async def get_national_average(
    equipment_type: str,
    session: SessionContext = Depends(require_organization_member()),
    db: AsyncSession = Depends(get_db)
):
    """Global national per-mile average for an equipment type (null if unknown)."""
    value = await BidAnalyticsService.get_national_average(db, equipment_type)
    return NationalAverageResponse(equipment_type=equipment_type, value=value)
