"""
Rate Aggregator.

Derives participation, distance-weighted averages, per-route statistics and
per-mile cost buckets from normalized bid rates. Pure computation, no I/O.
"""

import math
from typing import Iterable, List, Optional

from freightbid.app.schemas.analytics import (
    BidParticipationStats, CarrierRef, RouteAnalytics,
    CostDistributionBucket, CostDistributionRate,
)
from freightbid.app.services.rate_comparison import is_route_outlier
from freightbid.app.services.rate_normalizer import NormalizedRate, RateSubmission, per_mile_rates

# Cost buckets are $0.10 per mile wide
BUCKETS_PER_UNIT = 10


def _bucket_position(per_mile: float) -> float:
    # Float division leaves values like 7.8999999999999995 for 7.9
    return round(per_mile * BUCKETS_PER_UNIT, 9)


def participation_stats(total_invited: Optional[int], responded_count: Optional[int] = 0) -> BidParticipationStats:
    """
    Response rate as a percentage of invited carriers.

    Invitations and responses are counted independently, so more responses
    than invitations yields a rate above 100.
    """
    total_invited = total_invited or 0
    responded_count = responded_count or 0
    rate = (responded_count / total_invited * 100) if total_invited > 0 else 0.0

    return BidParticipationStats(
        total_invited=total_invited,
        responded_count=responded_count,
        response_rate=rate,
    )


def weighted_average_per_mile(normalized: Iterable[NormalizedRate]) -> Optional[float]:
    """
    Distance-weighted mean of per-mile rates.

    Returns None when no entry has a usable per-mile rate.
    """
    qualifying = per_mile_rates(normalized)
    if not qualifying:
        return None

    total_distance = sum(rate.distance for rate in qualifying)
    if total_distance <= 0:
        return None

    weighted_sum = sum(rate.per_mile * rate.distance for rate in qualifying)
    return weighted_sum / total_distance


def route_stats(route, rates: List[RateSubmission]) -> RouteAnalytics:
    """
    Best, average and count of the raw rates one route received.

    `route` is any object with the Route columns (id, origin_city,
    destination_city, equipment_type, commodity, distance). `rates` must
    already be limited to this route.
    """
    priced = [r for r in rates if r.value is not None]
    values = [r.value for r in priced]

    average = sum(values) / len(values) if values else None
    best = min(values) if values else None

    best_carriers = []
    if best is not None:
        best_carriers = [
            CarrierRef(id=r.carrier_id, name=r.carrier_name)
            for r in priced if r.value == best
        ]

    return RouteAnalytics(
        route_id=route.id,
        origin=route.origin_city,
        destination=route.destination_city,
        equipment_type=route.equipment_type,
        commodity=route.commodity,
        best_rate=best,
        best_rate_carriers=best_carriers,
        average_rate=average,
        response_count=len(priced),
        is_outlier=is_route_outlier(values),
        distance=route.distance,
    )


def cost_distribution(normalized: Iterable[NormalizedRate]) -> List[CostDistributionBucket]:
    """
    Histogram of per-mile rates in $0.10 buckets.

    Buckets run from floor(min) to ceil(max) at one-decimal resolution, both
    ends included, so the top rate always lands in a bucket. Rates without a
    usable distance or with a non-positive per-mile value are left out.
    """
    rates = [r for r in per_mile_rates(normalized) if r.per_mile > 0]
    if not rates:
        return []

    low = math.floor(_bucket_position(min(r.per_mile for r in rates)))
    high = math.ceil(_bucket_position(max(r.per_mile for r in rates)))

    buckets = [
        CostDistributionBucket(
            min=round(step / BUCKETS_PER_UNIT, 1),
            max=round((step + 1) / BUCKETS_PER_UNIT, 1),
        )
        for step in range(low, high + 1)
    ]

    for rate in rates:
        index = math.floor(_bucket_position(rate.per_mile)) - low
        index = max(0, min(index, len(buckets) - 1))
        bucket = buckets[index]
        bucket.count += 1
        bucket.rates.append(CostDistributionRate(
            carrier_id=rate.carrier_id,
            carrier_name=rate.carrier_name,
            route_id=rate.route_id,
            rate=rate.per_mile,
        ))

    return buckets
