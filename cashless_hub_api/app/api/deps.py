"""
Shared FastAPI dependencies.

``get_tenant_events`` is the single place where the caller's tenant
is attached to event storage.  Endpoints ask for it instead of
filtering by tenant themselves.
"""

import sqlite3

from fastapi import Depends

from ..core.db import get_db
from ..core.security import require_tenant
from ..repositories.event_repository import EventRepository, SQLiteEventRepository, TenantEvents
from ..repositories.payment_repository import PaymentRepository


def get_event_repository(conn: sqlite3.Connection = Depends(get_db)) -> EventRepository:
    return SQLiteEventRepository(conn)


def get_tenant_events(
    tenant_id: str = Depends(require_tenant),
    repository: EventRepository = Depends(get_event_repository),
) -> TenantEvents:
    return TenantEvents(repository, tenant_id)


def get_payment_repository(conn: sqlite3.Connection = Depends(get_db)) -> PaymentRepository:
    return PaymentRepository(conn)
