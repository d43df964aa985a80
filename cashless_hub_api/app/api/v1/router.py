"""
Top-level router for version 1 of the API.

This router aggregates the domain routers (events, payments) under a
unified prefix and exposes a small index describing them.  When new
domains are introduced, include their routers here and list them in
``ENDPOINTS``.
"""

from typing import Any, Dict

from fastapi import APIRouter

from cashless_hub_api.app.core.config import settings

from .endpoints import events, payments

ENDPOINTS = {
    "events": "/api/v1/events",
    "payments": "/api/v1/payments",
}

router = APIRouter()


@router.get("", include_in_schema=False)
async def api_index() -> Dict[str, Any]:
    return {
        "message": settings.project_name,
        "version": settings.api_version,
        "endpoints": ENDPOINTS,
    }


router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(payments.router, prefix="/payments", tags=["payments"])
