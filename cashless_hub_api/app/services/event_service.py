"""
Business logic for events.

All operations receive a ``TenantEvents`` handle, i.e. a repository
already bound to the caller's tenant, so an event owned by another
tenant is simply not found.  Validation failures raise
``BadRequestError`` with a code identifying the offending field;
lookups that miss raise ``NotFoundError``.

Known looseness kept on purpose:

* status transitions are not checked, any status may be written;
* on update, start/end ordering is only checked when both dates are
  part of the same request.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from ..core.errors import BadRequestError, ErrorCode, NotFoundError
from ..repositories.event_repository import TenantEvents
from ..schemas.event import EventCreate, EventRead, EventStatus, EventUpdate

logger = logging.getLogger(__name__)

# Columns that cannot be cleared with an explicit null on update.
REQUIRED_ON_UPDATE = {
    "name": ErrorCode.EVENT_NAME_REQUIRED,
    "location": ErrorCode.EVENT_LOCATION_REQUIRED,
    "start_date": ErrorCode.EVENT_START_DATE_REQUIRED,
    "end_date": ErrorCode.EVENT_END_DATE_REQUIRED,
    "status": ErrorCode.VALIDATION_ERROR,
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _check_date_range(start: datetime, end: datetime) -> None:
    if _as_utc(start) >= _as_utc(end):
        raise BadRequestError(ErrorCode.EVENT_INVALID_DATES, "startDate must be before endDate")


def _check_capacity(capacity: Optional[int]) -> None:
    if capacity is not None and capacity < 0:
        raise BadRequestError(ErrorCode.EVENT_INVALID_CAPACITY, "capacity must not be negative")


class EventService:
    """Tenant-scoped CRUD for events."""

    @classmethod
    async def list_events(cls, events: TenantEvents, status: Optional[str] = None) -> List[EventRead]:
        """Return every event of the tenant, newest start date first.

        ``status`` is matched as-is; an unknown value just matches
        nothing.  There is no pagination.
        """
        return events.list(status)

    @classmethod
    async def get_event(cls, events: TenantEvents, event_id: str) -> EventRead:
        event = events.get(event_id)
        if event is None:
            raise NotFoundError(ErrorCode.EVENT_NOT_FOUND)
        return event

    @classmethod
    async def create_event(cls, events: TenantEvents, data: EventCreate) -> EventRead:
        """Validate ``data`` and store a new event for the tenant.

        ``EventCreate`` has already rejected a missing name, location,
        start date or end date, in that order.  Date ordering is checked
        next, then capacity.
        """
        _check_date_range(data.start_date, data.end_date)
        _check_capacity(data.capacity)

        values = data.model_dump()
        values["status"] = data.status or EventStatus.DRAFT
        if values["images"] is None:
            del values["images"]
        event = events.create(values)
        logger.info("Tenant %s created event %s (%s)", events.tenant_id, event.id, event.name)
        return event

    @classmethod
    async def update_event(cls, events: TenantEvents, event_id: str, updates: EventUpdate) -> EventRead:
        """Apply the fields present in ``updates`` to an existing event.

        The event must exist under the tenant before anything else is
        validated.  Omitted fields keep their stored values.
        """
        if events.get(event_id) is None:
            raise NotFoundError(ErrorCode.EVENT_NOT_FOUND)

        changes = updates.model_dump(exclude_unset=True)
        for field, code in REQUIRED_ON_UPDATE.items():
            if field in changes and _is_blank(changes[field]):
                raise BadRequestError(code, f"{field} cannot be cleared")

        if updates.start_date is not None and updates.end_date is not None:
            _check_date_range(updates.start_date, updates.end_date)
        _check_capacity(updates.capacity)

        event = events.update(event_id, changes)
        if event is None:
            # Deleted by a concurrent request between the lookup and the write.
            raise NotFoundError(ErrorCode.EVENT_NOT_FOUND)
        logger.info("Tenant %s updated event %s: %s", events.tenant_id, event_id, sorted(changes))
        return event

    @classmethod
    async def delete_event(cls, events: TenantEvents, event_id: str) -> None:
        """Delete an event unless it is currently ``ACTIVE``."""
        event = events.get(event_id)
        if event is None:
            raise NotFoundError(ErrorCode.EVENT_NOT_FOUND)
        if event.status == EventStatus.ACTIVE:
            raise BadRequestError(ErrorCode.EVENT_CANNOT_DELETE_ACTIVE, "Active events cannot be deleted")
        events.delete(event_id)
        logger.info("Tenant %s deleted event %s", events.tenant_id, event_id)
