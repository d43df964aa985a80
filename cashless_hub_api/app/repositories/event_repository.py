"""
Event persistence.

``EventRepository`` is the interface the service layer depends on.
Every method takes the owning tenant id and must filter by it: an
event stored under another tenant is indistinguishable from a
missing one.  ``SQLiteEventRepository`` implements it on top of the
``sqlite3`` connection handed out per request by ``core.db.get_db``.

``TenantEvents`` binds a repository to one tenant.  It is built once
per request by the ``get_tenant_events`` dependency, so request
handlers never pass a tenant id themselves.
"""

import json
import sqlite3
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from ..schemas.event import EventRead

EVENT_COLUMNS = (
    "id, tenant_id, name, description, location, address, start_date, end_date, "
    "status, capacity, config, images, created_at, updated_at"
)

# Request field name -> column name, for the columns a client may set.
WRITABLE_COLUMNS = {
    "name": "name",
    "description": "description",
    "location": "location",
    "address": "address",
    "start_date": "start_date",
    "end_date": "end_date",
    "status": "status",
    "capacity": "capacity",
    "config": "config",
    "images": "images",
}

JSON_COLUMNS = {"config", "images"}


def to_db_timestamp(value: datetime) -> str:
    """Store datetimes as fixed-width UTC ISO strings so they sort lexically."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def _utcnow() -> str:
    return to_db_timestamp(datetime.now(timezone.utc))


def _to_db_value(column: str, value: Any) -> Any:
    if value is None:
        return None
    if column in JSON_COLUMNS:
        return json.dumps(value)
    if isinstance(value, datetime):
        return to_db_timestamp(value)
    if isinstance(value, Enum):
        return value.value
    return value


def _row_to_event(row: sqlite3.Row) -> EventRead:
    data = dict(row)
    data["config"] = json.loads(data["config"]) if data["config"] is not None else None
    data["images"] = json.loads(data["images"]) if data["images"] is not None else []
    return EventRead.model_validate(data)


class EventRepository(ABC):
    """Tenant-aware storage for events."""

    @abstractmethod
    def find_many(self, tenant_id: str, status: Optional[str] = None) -> List[EventRead]:
        """Return the tenant's events ordered by start date, newest first."""

    @abstractmethod
    def find_first(self, tenant_id: str, event_id: str) -> Optional[EventRead]:
        """Return the event if it exists under ``tenant_id``."""

    @abstractmethod
    def create(self, tenant_id: str, values: Dict[str, Any]) -> EventRead:
        """Insert a new event owned by ``tenant_id``."""

    @abstractmethod
    def update(self, tenant_id: str, event_id: str, changes: Dict[str, Any]) -> Optional[EventRead]:
        """Apply ``changes`` and return the updated event."""

    @abstractmethod
    def delete(self, tenant_id: str, event_id: str) -> bool:
        """Remove the event; return whether a row was deleted."""


class SQLiteEventRepository(EventRepository):
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_many(self, tenant_id: str, status: Optional[str] = None) -> List[EventRead]:
        query = f"SELECT {EVENT_COLUMNS} FROM events WHERE tenant_id = ?"
        params: list = [tenant_id]
        if status:
            query += " AND status = ?"
            params.append(status)
        query += " ORDER BY start_date DESC"
        rows = self.conn.execute(query, tuple(params)).fetchall()
        return [_row_to_event(row) for row in rows]

    def find_first(self, tenant_id: str, event_id: str) -> Optional[EventRead]:
        row = self.conn.execute(
            f"SELECT {EVENT_COLUMNS} FROM events WHERE id = ? AND tenant_id = ?",
            (event_id, tenant_id),
        ).fetchone()
        return _row_to_event(row) if row else None

    def create(self, tenant_id: str, values: Dict[str, Any]) -> EventRead:
        event_id = str(uuid.uuid4())
        now = _utcnow()
        columns = ["id", "tenant_id", "created_at", "updated_at"]
        params: list = [event_id, tenant_id, now, now]
        for field, column in WRITABLE_COLUMNS.items():
            if field in values:
                columns.append(column)
                params.append(_to_db_value(column, values[field]))
        placeholders = ", ".join("?" for _ in columns)
        self.conn.execute(
            f"INSERT INTO events ({', '.join(columns)}) VALUES ({placeholders})",
            tuple(params),
        )
        self.conn.commit()
        return self.find_first(tenant_id, event_id)

    def update(self, tenant_id: str, event_id: str, changes: Dict[str, Any]) -> Optional[EventRead]:
        assignments = []
        params: list = []
        for field, value in changes.items():
            column = WRITABLE_COLUMNS.get(field)
            if column is None:
                continue
            assignments.append(f"{column} = ?")
            params.append(_to_db_value(column, value))
        assignments.append("updated_at = ?")
        params.append(_utcnow())
        params.extend([event_id, tenant_id])
        self.conn.execute(
            f"UPDATE events SET {', '.join(assignments)} WHERE id = ? AND tenant_id = ?",
            tuple(params),
        )
        self.conn.commit()
        return self.find_first(tenant_id, event_id)

    def delete(self, tenant_id: str, event_id: str) -> bool:
        cursor = self.conn.execute(
            "DELETE FROM events WHERE id = ? AND tenant_id = ?",
            (event_id, tenant_id),
        )
        self.conn.commit()
        return cursor.rowcount > 0


class TenantEvents:
    """An ``EventRepository`` bound to a single tenant."""

    def __init__(self, repository: EventRepository, tenant_id: str) -> None:
        self.repository = repository
        self.tenant_id = tenant_id

    def list(self, status: Optional[str] = None) -> List[EventRead]:
        return self.repository.find_many(self.tenant_id, status)

    def get(self, event_id: str) -> Optional[EventRead]:
        return self.repository.find_first(self.tenant_id, event_id)

    def create(self, values: Dict[str, Any]) -> EventRead:
        return self.repository.create(self.tenant_id, values)

    def update(self, event_id: str, changes: Dict[str, Any]) -> Optional[EventRead]:
        return self.repository.update(self.tenant_id, event_id, changes)

    def delete(self, event_id: str) -> bool:
        return self.repository.delete(self.tenant_id, event_id)
