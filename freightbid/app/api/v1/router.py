"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from freightbid.app.api.v1.endpoints import audit_logs, auth, bid_analytics, dashboard

router = APIRouter()

router.include_router(auth.router)

router.include_router(bid_analytics.router)
router.include_router(bid_analytics.reference_router)

router.include_router(dashboard.router)

router.include_router(audit_logs.router)
