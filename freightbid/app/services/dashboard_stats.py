"""
Dashboard Stats Service.

Organization-level counters for the landing dashboard.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from freightbid.app.models.bid import Bid
from freightbid.app.models.carrier import Carrier
from freightbid.app.models.enums import BidStatus
from freightbid.app.models.route import Route
from freightbid.app.schemas.analytics import DashboardStats


async def get_dashboard_stats(db: AsyncSession, organization_id: int) -> DashboardStats:
    """Carriers, active bids and non-deleted routes for an organization."""

    carriers_query = select(func.count(Carrier.id)).where(
        Carrier.organization_id == organization_id
    )
    total_carriers = (await db.execute(carriers_query)).scalar() or 0

    bids_query = select(func.count(Bid.id)).where(
        Bid.organization_id == organization_id,
        Bid.status == BidStatus.ACTIVE
    )
    active_bids = (await db.execute(bids_query)).scalar() or 0

    routes_query = select(func.count(Route.id)).where(
        Route.organization_id == organization_id,
        Route.is_deleted == False
    )
    total_routes = (await db.execute(routes_query)).scalar() or 0

    return DashboardStats(
        total_carriers=total_carriers,
        active_bids=active_bids,
        total_routes=total_routes
    )
