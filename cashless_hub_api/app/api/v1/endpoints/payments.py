"""
Payment endpoints for API v1.

Read-only views over the payments recorded at an event.  Any member
of the tenant may read them.
"""

from typing import List

from fastapi import APIRouter, Depends

from cashless_hub_api.app.api.deps import get_payment_repository, get_tenant_events
from cashless_hub_api.app.repositories.event_repository import TenantEvents
from cashless_hub_api.app.repositories.payment_repository import PaymentRepository
from cashless_hub_api.app.schemas.common import DataResponse
from cashless_hub_api.app.schemas.payment import PaymentRead, PaymentStats
from cashless_hub_api.app.services.payment_service import PaymentService


router = APIRouter()


@router.get("/events/{event_id}", response_model=DataResponse[List[PaymentRead]])
async def list_event_payments(
    event_id: str,
    events: TenantEvents = Depends(get_tenant_events),
    payments: PaymentRepository = Depends(get_payment_repository),
) -> DataResponse[List[PaymentRead]]:
    """List the payments of one event, most recently paid first."""
    data = await PaymentService.list_event_payments(events, payments, event_id)
    return DataResponse(data=data)


@router.get("/events/{event_id}/stats", response_model=DataResponse[PaymentStats])
async def get_event_payment_stats(
    event_id: str,
    events: TenantEvents = Depends(get_tenant_events),
    payments: PaymentRepository = Depends(get_payment_repository),
) -> DataResponse[PaymentStats]:
    """Revenue and transaction statistics over completed payments."""
    data = await PaymentService.get_event_stats(events, payments, event_id)
    return DataResponse(data=data)
