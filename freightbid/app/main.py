"""
FastAPI Application Entry Point.

This is the main application file for the Freight Bid Analytics service.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from freightbid.app.core.config import settings
from freightbid.app.core.observability import ObservabilityMiddleware, configure_logging
from freightbid.app.core.redis_client import close_redis, ping_redis
from freightbid.app.core.reliability import RetryPolicy
from freightbid.app.api.v1.router import router as api_v1_router
from freightbid.app.db.session import engine, Base
from freightbid.app.services.cache import QueryCache
from freightbid.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from freightbid.app.models.organization import Organization
from freightbid.app.models.user import User
from freightbid.app.models.audit_log import AuditLog
from freightbid.app.models.carrier import Carrier
from freightbid.app.models.route import Route
from freightbid.app.models.bid import Bid
from freightbid.app.models.route_bid import RouteBid
from freightbid.app.models.invitation import BidCarrierInvitation, CarrierBidResponse
from freightbid.app.models.carrier_route_rate import CarrierRouteRate
from freightbid.app.models.national_average import NationalRouteAverage

configure_logging(settings.log_level)


def build_query_cache() -> QueryCache:
    """Query cache with the configured stale time and retry budget."""
    return QueryCache(
        retry_policy=RetryPolicy(
            retries=settings.query_retry_count,
            delay_seconds=settings.query_retry_delay_seconds,
        ),
        default_ttl_seconds=settings.analytics_cache_ttl_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.

    1. Creates database tables on startup.
    2. Drops cached queries and closes Redis on shutdown.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await app.state.query_cache.clear()
    await close_redis()


app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Bid-rate analytics for freight procurement",
    lifespan=lifespan,
)

app.state.query_cache = build_query_cache()

app.add_middleware(ObservabilityMiddleware)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        dict: Status, application information and token-store reachability
    """
    return {
        "status": "healthy",
        "token_store": "up" if await ping_redis() else "down",
        "app_name": settings.app_name,
        "version": settings.api_version,
    }


app.include_router(api_v1_router, prefix=f"/{settings.api_version}")


@app.get("/", tags=["Root"])
async def root():
    """Welcome message and API documentation links."""
    return {
        "message": "Welcome to the Freight Bid Analytics API",
        "docs": "/docs",
        "health": "/health",
    }
