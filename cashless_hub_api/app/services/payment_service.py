"""
Business logic for payments.

Payments are read-only here.  Both operations first make sure the
event belongs to the caller's tenant, so payments of a foreign event
are reported as ``EVENT_NOT_FOUND``.
"""

from collections import Counter, defaultdict
from datetime import timezone
from typing import Dict, List

from ..core.errors import ErrorCode, NotFoundError
from ..repositories.event_repository import TenantEvents
from ..repositories.payment_repository import PaymentRepository
from ..schemas.payment import PaymentRead, PaymentStats, PaymentStatus


class PaymentService:
    """Per-event payment listing and statistics."""

    @classmethod
    def _ensure_event(cls, events: TenantEvents, event_id: str) -> None:
        if events.get(event_id) is None:
            raise NotFoundError(ErrorCode.EVENT_NOT_FOUND)

    @classmethod
    async def list_event_payments(
        cls,
        events: TenantEvents,
        payments: PaymentRepository,
        event_id: str,
    ) -> List[PaymentRead]:
        cls._ensure_event(events, event_id)
        return payments.find_for_event(events.tenant_id, event_id)

    @classmethod
    async def get_event_stats(
        cls,
        events: TenantEvents,
        payments: PaymentRepository,
        event_id: str,
    ) -> PaymentStats:
        """Aggregate the completed payments of an event.

        Pending and refunded payments are ignored.  Revenue per hour is
        grouped by the UTC hour of ``paid_at``; payments without one
        only count towards the totals.
        """
        cls._ensure_event(events, event_id)
        completed = payments.find_for_event(events.tenant_id, event_id, PaymentStatus.COMPLETED)

        total_revenue = sum(p.amount for p in completed)
        total_transactions = len(completed)
        avg_transaction = total_revenue / total_transactions if total_transactions else 0.0

        method_counts = Counter(p.payment_method.value for p in completed)
        revenue_by_hour: Dict[int, float] = defaultdict(float)
        for payment in completed:
            if payment.paid_at is None:
                continue
            paid_at = payment.paid_at
            if paid_at.tzinfo is not None:
                paid_at = paid_at.astimezone(timezone.utc)
            revenue_by_hour[paid_at.hour] += payment.amount

        return PaymentStats(
            total_revenue=total_revenue,
            total_transactions=total_transactions,
            avg_transaction=avg_transaction,
            payment_method_stats=dict(method_counts),
            revenue_by_hour=dict(sorted(revenue_by_hour.items())),
        )
