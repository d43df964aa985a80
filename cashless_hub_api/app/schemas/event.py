"""
Pydantic models for event data.

``EventCreate`` and ``EventUpdate`` describe request bodies.  Their
fields are all optional at the schema level so that each failure maps
to its own error code.  ``EventCreate`` checks the presence of the
required fields on the raw body, before any type coercion, so a
missing name is reported ahead of a malformed date.  Value rules
(date ordering, capacity) are checked by ``EventService``.  A blank
string counts as a missing value.
``EventRead`` is the representation returned to clients.
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..core.errors import BadRequestError, ErrorCode
from .common import ApiModel

# SQLite stores INTEGER as a signed 64-bit value; the column is an int4
# for the dashboard.
MAX_CAPACITY = 2**31 - 1

# Checked in this order; the first missing field wins.
REQUIRED_ON_CREATE = (
    ("name", ErrorCode.EVENT_NAME_REQUIRED),
    ("location", ErrorCode.EVENT_LOCATION_REQUIRED),
    ("start_date", ErrorCode.EVENT_START_DATE_REQUIRED),
    ("end_date", ErrorCode.EVENT_END_DATE_REQUIRED),
)


class EventStatus(str, Enum):
    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class EventFields(ApiModel):
    name: Optional[str] = Field(None, examples=["Summer Opening Night"])
    description: Optional[str] = Field(None, examples=["Season opening with guest DJs"])
    location: Optional[str] = Field(None, examples=["Club Neon"])
    address: Optional[str] = Field(None, examples=["12 Harbour Street"])
    start_date: Optional[datetime] = Field(None, examples=["2025-06-01T20:00:00Z"])
    end_date: Optional[datetime] = Field(None, examples=["2025-06-02T04:00:00Z"])
    status: Optional[EventStatus] = None
    capacity: Optional[int] = Field(None, le=MAX_CAPACITY, examples=[800])
    config: Optional[Any] = None
    images: Optional[List[str]] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class EventCreate(EventFields):
    """Schema for creating an event.

    Any ``tenantId`` sent by the client is ignored; the tenant always
    comes from the access token.
    """

    @model_validator(mode="before")
    @classmethod
    def check_required_fields(cls, data: Any) -> Any:
        # BadRequestError is not a ValueError, so pydantic lets it
        # propagate to the API error handler unchanged.
        if isinstance(data, dict):
            for field, code in REQUIRED_ON_CREATE:
                value = data.get(to_camel(field), data.get(field))
                if value is None or (isinstance(value, str) and not value.strip()):
                    raise BadRequestError(code)
        return data


class EventUpdate(EventFields):
    """Schema for updating an event.

    Only the fields present in the request body are applied; use
    ``model_dump(exclude_unset=True)`` to get them.
    """


class EventRead(ApiModel):
    """Schema for reading an event from the API."""

    id: str
    tenant_id: str
    name: str
    description: Optional[str] = None
    location: str
    address: Optional[str] = None
    start_date: datetime
    end_date: datetime
    status: EventStatus
    capacity: Optional[int] = None
    config: Optional[Any] = None
    images: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
