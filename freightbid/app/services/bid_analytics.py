"""
Bid Analytics Service.

Reads routes, rate submissions, invitations and national averages for a bid
and feeds them through the normalizer, aggregator and comparator.
Focused on READ-ONLY operations; every call recomputes from raw rows.

Queries run one after another on the caller's session. Store failures
propagate unchanged; missing data yields empty lists and None values.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Dict, List, Optional

from freightbid.app.core.exceptions import ResourceNotFoundError
from freightbid.app.models.bid import Bid
from freightbid.app.models.carrier import Carrier
from freightbid.app.models.carrier_route_rate import CarrierRouteRate
from freightbid.app.models.invitation import BidCarrierInvitation, CarrierBidResponse
from freightbid.app.models.national_average import NationalRouteAverage
from freightbid.app.models.route import Route
from freightbid.app.models.route_bid import RouteBid
from freightbid.app.schemas.analytics import (
    BidParticipationStats, RouteAnalytics,
    CostDistributionBucket, AverageRateAnalytics,
)
from freightbid.app.services.rate_normalizer import (
    RateSubmission, normalize_rates, per_mile_rates, select_current_versions,
)
from freightbid.app.services.rate_aggregation import (
    participation_stats, weighted_average_per_mile, route_stats, cost_distribution,
)
from freightbid.app.services.rate_comparison import compare_to_national


class BidAnalyticsService:

    @staticmethod
    async def get_bid(db: AsyncSession, bid_id: int, organization_id: int) -> Bid:
        """Load a bid visible to the organization or raise 404."""
        result = await db.execute(
            select(Bid).where(Bid.id == bid_id, Bid.organization_id == organization_id)
        )
        bid = result.scalar_one_or_none()
        if not bid:
            raise ResourceNotFoundError("Bid", bid_id)
        return bid

    @staticmethod
    async def get_bid_participation_stats(db: AsyncSession, bid_id: int) -> BidParticipationStats:
        """Invited carriers vs. carriers that submitted a (non-draft) response."""

        invited_query = select(func.count(BidCarrierInvitation.id)).where(
            BidCarrierInvitation.bid_id == bid_id
        )
        total_invited = (await db.execute(invited_query)).scalar() or 0

        # Resubmissions add rows, so count carriers rather than rows
        responded_query = select(func.count(func.distinct(CarrierBidResponse.carrier_id))).where(
            CarrierBidResponse.bid_id == bid_id,
            CarrierBidResponse.is_draft == False
        )
        responded = (await db.execute(responded_query)).scalar() or 0

        return participation_stats(total_invited, responded)

    @staticmethod
    async def _get_bid_routes(db: AsyncSession, bid_id: int) -> List[Route]:
        stmt = select(Route).join(RouteBid, RouteBid.route_id == Route.id)\
            .where(RouteBid.bid_id == bid_id, Route.is_deleted == False)\
            .order_by(Route.id)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def _get_bid_rates(db: AsyncSession, bid_id: int) -> List[RateSubmission]:
        """Current-version priced submissions for a bid, with carrier names."""
        stmt = select(CarrierRouteRate, Carrier.name)\
            .join(Carrier, Carrier.id == CarrierRouteRate.carrier_id)\
            .where(CarrierRouteRate.bid_id == bid_id)\
            .order_by(CarrierRouteRate.id)
        result = await db.execute(stmt)

        submissions = [
            RateSubmission(
                id=rate.id,
                bid_id=rate.bid_id,
                route_id=rate.route_id,
                carrier_id=rate.carrier_id,
                carrier_name=carrier_name,
                value=rate.value,
                currency=rate.currency,
                comment=rate.comment,
                version=rate.version,
            )
            for rate, carrier_name in result.all()
        ]

        # A blanked lane in the latest version hides the older priced one
        current = select_current_versions(submissions)
        return [s for s in current if s.value is not None]

    @staticmethod
    def _distance_lookup(routes: List[Route]) -> Dict[int, Optional[float]]:
        return {route.id: route.distance for route in routes}

    @staticmethod
    async def get_route_analytics(db: AsyncSession, bid_id: int) -> List[RouteAnalytics]:
        """Best rate, tied carriers, average and response count per bid route."""
        routes = await BidAnalyticsService._get_bid_routes(db, bid_id)
        if not routes:
            return []

        rates = await BidAnalyticsService._get_bid_rates(db, bid_id)

        return [
            route_stats(route, [r for r in rates if r.route_id == route.id])
            for route in routes
        ]

    @staticmethod
    async def get_cost_distribution(db: AsyncSession, bid_id: int) -> List[CostDistributionBucket]:
        """Per-mile rate histogram for a bid."""
        routes = await BidAnalyticsService._get_bid_routes(db, bid_id)
        if not routes:
            return []

        rates = await BidAnalyticsService._get_bid_rates(db, bid_id)
        if not rates:
            return []

        normalized = normalize_rates(rates, BidAnalyticsService._distance_lookup(routes))
        return cost_distribution(normalized)

    @staticmethod
    async def get_national_average(db: AsyncSession, equipment_type: str) -> Optional[float]:
        """Global (bid-independent) national average for an equipment type."""
        stmt = select(NationalRouteAverage.value).where(
            NationalRouteAverage.equipment_type == equipment_type,
            NationalRouteAverage.bid_id.is_(None)
        ).order_by(NationalRouteAverage.updated_at.desc(), NationalRouteAverage.id.desc())
        value = (await db.execute(stmt)).scalars().first()
        return value

    @staticmethod
    async def get_average_rate_analytics(
        db: AsyncSession, bid_id: int, equipment_type: Optional[str]
    ) -> AverageRateAnalytics:
        """
        Distance-weighted per-mile average for a bid and its comparison with
        the national average for `equipment_type`.

        Rates on routes without a positive distance are left out. With no
        qualifying rates the national average is not looked up at all.
        """
        routes = await BidAnalyticsService._get_bid_routes(db, bid_id)
        rates = await BidAnalyticsService._get_bid_rates(db, bid_id)

        normalized = normalize_rates(rates, BidAnalyticsService._distance_lookup(routes))
        qualifying = per_mile_rates(normalized)
        if not qualifying:
            return AverageRateAnalytics()

        weighted = weighted_average_per_mile(qualifying)

        national = None
        if equipment_type:
            national = await BidAnalyticsService.get_national_average(db, equipment_type)

        comparison = compare_to_national(weighted, national)

        return AverageRateAnalytics(
            weighted_average_per_mile=weighted,
            total_responses=len(qualifying),
            national_average=national,
            national_average_comparison=comparison.comparison_percent if comparison else None,
            comparison_label=comparison.label if comparison else None,
        )
