"""
Read-only access to payments.

Payments are inserted by the cashless terminals; this API only lists
them per event.  Queries always filter by tenant as well as event.
Each payment carries the paying user (id, email and name) when that
user is known.
"""

import json
import sqlite3
from typing import List, Optional

from ..schemas.payment import PaymentRead, PaymentStatus

PAYMENT_COLUMNS = (
    "p.id, p.amount, p.currency, p.payment_method, p.status, p.paid_at, p.event_id, "
    "p.user_id, p.tenant_id, p.metadata, p.created_at, "
    "u.id AS user__id, u.email AS user__email, "
    "u.first_name AS user__first_name, u.last_name AS user__last_name"
)


def _row_to_payment(row: sqlite3.Row) -> PaymentRead:
    data = {}
    user = {}
    for key in row.keys():
        if key.startswith("user__"):
            user[key[len("user__"):]] = row[key]
        else:
            data[key] = row[key]
    data["metadata"] = json.loads(data["metadata"]) if data["metadata"] is not None else None
    data["user"] = user if user["id"] is not None else None
    return PaymentRead.model_validate(data)


class PaymentRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_for_event(
        self,
        tenant_id: str,
        event_id: str,
        status: Optional[PaymentStatus] = None,
    ) -> List[PaymentRead]:
        """Return the event's payments, most recently paid first.

        Payments that are still pending have no ``paid_at`` and are
        listed last.
        """
        query = (
            f"SELECT {PAYMENT_COLUMNS} FROM payments p "
            "LEFT JOIN users u ON u.id = p.user_id "
            "WHERE p.event_id = ? AND p.tenant_id = ?"
        )
        params: list = [event_id, tenant_id]
        if status is not None:
            query += " AND p.status = ?"
            params.append(status.value)
        query += " ORDER BY p.paid_at IS NULL, p.paid_at DESC"
        rows = self.conn.execute(query, tuple(params)).fetchall()
        return [_row_to_payment(row) for row in rows]
