"""
Event endpoints for API v1.

Tenant-scoped CRUD for events.  Every route requires an access token
carrying a tenant context; creating, updating and deleting events
additionally requires a tenant admin (or super admin).  Events of
other tenants are reported as not found.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from cashless_hub_api.app.api.deps import get_tenant_events
from cashless_hub_api.app.core.security import require_tenant_admin
from cashless_hub_api.app.repositories.event_repository import TenantEvents
from cashless_hub_api.app.schemas.common import DataResponse, MessageResponse
from cashless_hub_api.app.schemas.event import EventCreate, EventRead, EventUpdate
from cashless_hub_api.app.services.event_service import EventService


router = APIRouter()


@router.get("", response_model=DataResponse[List[EventRead]])
async def list_events(
    status_filter: Optional[str] = Query(None, alias="status"),
    events: TenantEvents = Depends(get_tenant_events),
) -> DataResponse[List[EventRead]]:
    """List the tenant's events, newest start date first.

    - **status**: optional exact status match (e.g. `ACTIVE`).
    """
    data = await EventService.list_events(events, status_filter)
    return DataResponse(data=data)


@router.get("/{event_id}", response_model=DataResponse[EventRead])
async def get_event(
    event_id: str,
    events: TenantEvents = Depends(get_tenant_events),
) -> DataResponse[EventRead]:
    """Retrieve a single event.  Raises 404 if it is not the tenant's."""
    return DataResponse(data=await EventService.get_event(events, event_id))


@router.post("", response_model=DataResponse[EventRead], status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    current_user: Dict[str, Any] = Depends(require_tenant_admin),
    events: TenantEvents = Depends(get_tenant_events),
) -> DataResponse[EventRead]:
    """Create a new event for the caller's tenant.

    ``name``, ``location``, ``startDate`` and ``endDate`` are
    required; ``status`` defaults to ``DRAFT``.
    """
    return DataResponse(data=await EventService.create_event(events, event))


@router.put("/{event_id}", response_model=DataResponse[EventRead])
async def update_event(
    event_id: str,
    updates: EventUpdate,
    current_user: Dict[str, Any] = Depends(require_tenant_admin),
    events: TenantEvents = Depends(get_tenant_events),
) -> DataResponse[EventRead]:
    """Update an existing event.

    Partial updates are supported; fields absent from the body remain
    unchanged.
    """
    return DataResponse(data=await EventService.update_event(events, event_id, updates))


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    current_user: Dict[str, Any] = Depends(require_tenant_admin),
    events: TenantEvents = Depends(get_tenant_events),
) -> MessageResponse:
    """Delete an event.  Active events cannot be deleted."""
    await EventService.delete_event(events, event_id)
    return MessageResponse(message="Event deleted successfully")
