"""
Service tests for bid analytics against a seeded SQLite store.
"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from freightbid.app.core.exceptions import ResourceNotFoundError
from freightbid.app.services.bid_analytics import BidAnalyticsService
from freightbid.app.services.dashboard_stats import get_dashboard_stats


@pytest.mark.asyncio
async def test_participation_counts_distinct_non_draft_responders(db_session, bid_scenario):
    stats = await BidAnalyticsService.get_bid_participation_stats(db_session, bid_scenario["bid_id"])

    assert stats.total_invited == 3
    assert stats.responded_count == 2
    assert stats.response_rate == pytest.approx(66.667, abs=1e-3)


@pytest.mark.asyncio
async def test_participation_for_bid_without_invitations(db_session, bid_scenario):
    stats = await BidAnalyticsService.get_bid_participation_stats(db_session, bid_scenario["empty_bid_id"])

    assert stats.total_invited == 0
    assert stats.responded_count == 0
    assert stats.response_rate == 0


@pytest.mark.asyncio
async def test_route_analytics(db_session, bid_scenario):
    routes = bid_scenario["routes"]
    carriers = bid_scenario["carriers"]

    analytics = await BidAnalyticsService.get_route_analytics(db_session, bid_scenario["bid_id"])

    # Soft-deleted route is left out
    assert [a.route_id for a in analytics] == [routes["chicago"], routes["denver"], routes["laredo"]]

    chicago, denver, laredo = analytics
    assert chicago.best_rate == 100
    assert {c.id for c in chicago.best_rate_carriers} == {carriers["swift"], carriers["blue"]}
    assert {c.name for c in chicago.best_rate_carriers} == {"Swift Lines", "Blue Haul"}
    assert chicago.average_rate == pytest.approx(166.667, abs=1e-3)
    assert chicago.response_count == 3
    assert chicago.is_outlier is False

    # Only the resubmitted version counts
    assert denver.best_rate == 150
    assert denver.average_rate == 150
    assert denver.response_count == 1

    assert laredo.best_rate == 500
    assert laredo.distance is None
    assert laredo.equipment_type == "Reefer"


@pytest.mark.asyncio
async def test_route_analytics_for_bid_without_routes(db_session, bid_scenario):
    assert await BidAnalyticsService.get_route_analytics(db_session, bid_scenario["empty_bid_id"]) == []


@pytest.mark.asyncio
async def test_cost_distribution(db_session, bid_scenario):
    buckets = await BidAnalyticsService.get_cost_distribution(db_session, bid_scenario["bid_id"])

    assert buckets[0].min == 1.0
    assert buckets[-1].min == 3.0
    assert len(buckets) == 21
    assert buckets[0].count == 2
    assert buckets[-1].count == 2
    # Route without distance contributes nothing
    assert sum(b.count for b in buckets) == 4
    assert bid_scenario["routes"]["laredo"] not in {r.route_id for b in buckets for r in b.rates}


@pytest.mark.asyncio
async def test_cost_distribution_for_bid_without_routes(db_session, bid_scenario):
    assert await BidAnalyticsService.get_cost_distribution(db_session, bid_scenario["empty_bid_id"]) == []


@pytest.mark.asyncio
async def test_average_rate_analytics(db_session, bid_scenario):
    analytics = await BidAnalyticsService.get_average_rate_analytics(
        db_session, bid_scenario["bid_id"], "Dry Van"
    )

    # (100 + 100 + 300 + 150) / (100 * 3 + 50)
    assert analytics.weighted_average_per_mile == pytest.approx(650 / 350)
    assert analytics.total_responses == 4
    assert analytics.national_average == 2.0
    assert analytics.national_average_comparison == pytest.approx(-7.142857, abs=1e-6)
    assert analytics.comparison_label == "below"


@pytest.mark.asyncio
async def test_average_rate_without_equipment_type_skips_comparison(db_session, bid_scenario):
    analytics = await BidAnalyticsService.get_average_rate_analytics(
        db_session, bid_scenario["bid_id"], None
    )

    assert analytics.weighted_average_per_mile == pytest.approx(650 / 350)
    assert analytics.national_average is None
    assert analytics.national_average_comparison is None
    assert analytics.comparison_label is None


@pytest.mark.asyncio
async def test_average_rate_for_bid_without_rates(db_session, bid_scenario):
    analytics = await BidAnalyticsService.get_average_rate_analytics(
        db_session, bid_scenario["empty_bid_id"], "Flatbed"
    )

    assert analytics.weighted_average_per_mile is None
    assert analytics.total_responses == 0
    assert analytics.national_average is None
    assert analytics.national_average_comparison is None


@pytest.mark.asyncio
async def test_national_average_uses_global_figure(db_session, bid_scenario):
    assert await BidAnalyticsService.get_national_average(db_session, "Dry Van") == 2.0
    assert await BidAnalyticsService.get_national_average(db_session, "Reefer") == 2.8
    assert await BidAnalyticsService.get_national_average(db_session, "Flatbed") is None


@pytest.mark.asyncio
async def test_get_bid_is_scoped_to_organization(db_session, bid_scenario):
    bid = await BidAnalyticsService.get_bid(db_session, bid_scenario["bid_id"], bid_scenario["organization_id"])
    assert bid.name == "Q3 Dry Van RFP"

    with pytest.raises(ResourceNotFoundError):
        await BidAnalyticsService.get_bid(
            db_session, bid_scenario["foreign_bid_id"], bid_scenario["organization_id"]
        )


@pytest.mark.asyncio
async def test_store_failure_propagates():
    db = AsyncMock()
    db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection reset"))

    with pytest.raises(OperationalError):
        await BidAnalyticsService.get_route_analytics(db, 1)


@pytest.mark.asyncio
async def test_dashboard_stats(db_session, bid_scenario):
    stats = await get_dashboard_stats(db_session, bid_scenario["organization_id"])

    assert stats.total_carriers == 3
    assert stats.active_bids == 1
    assert stats.total_routes == 3

    other = await get_dashboard_stats(db_session, bid_scenario["other_organization_id"])
    assert other.active_bids == 1
    assert other.total_carriers == 0
