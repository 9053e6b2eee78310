"""
Centralized Test Configuration.
"""

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import Pool, StaticPool

from freightbid.app.main import app
from freightbid.app.db.session import get_db, Base
from freightbid.app.core.reliability import RetryPolicy
from freightbid.app.services.cache import QueryCache
import freightbid.app.core.redis_client as redis_client_module

from freightbid.app.models.organization import Organization
from freightbid.app.models.carrier import Carrier
from freightbid.app.models.route import Route
from freightbid.app.models.bid import Bid
from freightbid.app.models.route_bid import RouteBid
from freightbid.app.models.invitation import BidCarrierInvitation, CarrierBidResponse
from freightbid.app.models.carrier_route_rate import CarrierRouteRate
from freightbid.app.models.national_average import NationalRouteAverage
from freightbid.app.models.enums import BidStatus, CarrierStatus, InvitationStatus, CurrencyType

# Setup In-Memory Test Database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@event.listens_for(Pool, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints for SQLite."""
    if 'sqlite' in str(type(dbapi_conn)):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


# Mock Redis for reliability in CI/CD
class MockRedis:
    def __init__(self):
        self.store = {}

    async def ping(self):
        return True

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        return True

    async def setex(self, key, ttl, value):
        self.store[key] = value
        return True

    async def delete(self, key):
        if key in self.store:
            del self.store[key]
            return 1
        return 0

    async def exists(self, key):
        return 1 if key in self.store else 0

    async def flushdb(self):
        self.store = {}

    async def aclose(self):
        self.store = {}


@pytest.fixture(scope="session")
def redis_client_session():
    return MockRedis()


@pytest.fixture(scope="session", autouse=True)
def apply_overrides(redis_client_session):
    """Apply overrides once for the session."""
    original_client = redis_client_module.redis_client
    redis_client_module.redis_client = redis_client_session

    async def override_get_db():
        async with TestingSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield

    app.dependency_overrides = {}
    redis_client_module.redis_client = original_client


@pytest.fixture(autouse=True)
async def setup_database(redis_client_session):
    """Create tables and a fresh query cache before each test, drop after."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    await redis_client_session.flushdb()
    app.state.query_cache = QueryCache(RetryPolicy(retries=3, delay_seconds=0))

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    """Async client for testing."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def session_factory():
    return TestingSessionLocal


@pytest.fixture
async def db_session():
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture
async def bid_scenario(db_session):
    """
    One organization running a Dry Van bid:

    - route 1 Chicago -> Dallas, 100 mi: 100 (Swift), 100 (Blue Haul), 300 (Prairie)
    - route 2 Denver -> Phoenix, 50 mi: Swift quoted 180 then resubmitted 150
    - route 3 Laredo -> Monterrey, no distance: 500 (Blue Haul)
    - route 4 soft-deleted, 200 mi: 400 (Swift)

    Three carriers invited; Swift (two versions) and Blue Haul responded,
    Prairie only saved a draft. National Dry Van average is 2.0.
    A second organization owns a bid of its own.
    """
    db = db_session

    org = Organization(name="Acme Freight")
    other_org = Organization(name="Other Shipper")
    db.add_all([org, other_org])
    await db.flush()

    swift = Carrier(organization_id=org.id, name="Swift Lines", status=CarrierStatus.ACTIVE)
    blue = Carrier(organization_id=org.id, name="Blue Haul", status=CarrierStatus.ACTIVE)
    prairie = Carrier(organization_id=org.id, name="Prairie Express", status=CarrierStatus.PENDING)
    db.add_all([swift, blue, prairie])

    chicago = Route(organization_id=org.id, origin_city="Chicago", destination_city="Dallas",
                    equipment_type="Dry Van", commodity="Paper", weekly_volume=5, distance=100)
    denver = Route(organization_id=org.id, origin_city="Denver", destination_city="Phoenix",
                   equipment_type="Dry Van", commodity="Beverages", weekly_volume=3, distance=50)
    laredo = Route(organization_id=org.id, origin_city="Laredo", destination_city="Monterrey",
                   equipment_type="Reefer", commodity="Produce", weekly_volume=2, distance=None)
    retired = Route(organization_id=org.id, origin_city="Reno", destination_city="Boise",
                    equipment_type="Dry Van", commodity="Lumber", weekly_volume=1, distance=200,
                    is_deleted=True)
    db.add_all([chicago, denver, laredo, retired])

    bid = Bid(organization_id=org.id, name="Q3 Dry Van RFP", status=BidStatus.ACTIVE,
              equipment_type="Dry Van")
    empty_bid = Bid(organization_id=org.id, name="Empty RFP", status=BidStatus.DRAFT,
                    equipment_type="Flatbed")
    foreign_bid = Bid(organization_id=other_org.id, name="Not Yours", status=BidStatus.ACTIVE,
                      equipment_type="Dry Van")
    db.add_all([bid, empty_bid, foreign_bid])
    await db.flush()

    db.add_all([RouteBid(route_id=r.id, bid_id=bid.id) for r in (chicago, denver, laredo, retired)])

    db.add_all([
        BidCarrierInvitation(bid_id=bid.id, carrier_id=c.id, status=InvitationStatus.DELIVERED)
        for c in (swift, blue, prairie)
    ])
    db.add_all([
        CarrierBidResponse(bid_id=bid.id, carrier_id=swift.id, responder_name="Sam",
                           responder_email="sam@swift.example.com", version=1),
        CarrierBidResponse(bid_id=bid.id, carrier_id=swift.id, responder_name="Sam",
                           responder_email="sam@swift.example.com", version=2),
        CarrierBidResponse(bid_id=bid.id, carrier_id=blue.id, responder_name="Bea",
                           responder_email="bea@bluehaul.example.com"),
        CarrierBidResponse(bid_id=bid.id, carrier_id=prairie.id, responder_name="Pat",
                           responder_email="pat@prairie.example.com", is_draft=True),
    ])

    def rate(route, carrier, value, version=1, currency=CurrencyType.USD):
        return CarrierRouteRate(bid_id=bid.id, route_id=route.id, carrier_id=carrier.id,
                                value=value, version=version, currency=currency)

    db.add_all([
        rate(chicago, swift, 100),
        rate(chicago, blue, 100),
        rate(chicago, prairie, 300),
        rate(denver, swift, 180, version=1),
        rate(denver, swift, 150, version=2),
        rate(laredo, blue, 500, currency=CurrencyType.MXN),
        rate(retired, swift, 400),
    ])

    db.add_all([
        NationalRouteAverage(equipment_type="Dry Van", value=2.0, bid_id=None),
        NationalRouteAverage(equipment_type="Dry Van", value=5.0, bid_id=bid.id),
        NationalRouteAverage(equipment_type="Reefer", value=2.8, bid_id=None),
    ])

    await db.commit()

    return {
        "organization_id": org.id,
        "other_organization_id": other_org.id,
        "bid_id": bid.id,
        "empty_bid_id": empty_bid.id,
        "foreign_bid_id": foreign_bid.id,
        "carriers": {"swift": swift.id, "blue": blue.id, "prairie": prairie.id},
        "routes": {"chicago": chicago.id, "denver": denver.id, "laredo": laredo.id, "retired": retired.id},
    }


@pytest.fixture
async def analyst_token(client, bid_scenario):
    """Register an ANALYST into the seeded organization and return its token."""
    response = await client.post("/v1/auth/register", json={
        "email": "analyst@acme-freight.com",
        "username": "acme_analyst",
        "password": "password123",
        "role": "ANALYST",
        "organization_name": "Acme Freight"
    })
    assert response.status_code == 201
    return response.json()["access_token"]
