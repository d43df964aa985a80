"""
Pydantic models for payment data.

Payments are written by the cashless terminals and only read here,
either as a per-event list or as aggregated statistics.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field

from .common import ApiModel


class PaymentMethod(str, Enum):
    BRACELET = "BRACELET"
    CARD = "CARD"
    CASH = "CASH"
    WALLET = "WALLET"
    TRANSFER = "TRANSFER"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


class PaymentUser(ApiModel):
    """The end user who paid, as embedded in a payment."""

    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class PaymentRead(ApiModel):
    id: str
    amount: float = Field(..., examples=[12.5])
    currency: str = Field("EUR", examples=["EUR"])
    payment_method: PaymentMethod
    status: PaymentStatus
    paid_at: Optional[datetime] = None
    event_id: str
    user_id: str
    tenant_id: str
    metadata: Optional[Any] = None
    created_at: Optional[datetime] = None
    user: Optional[PaymentUser] = None


class PaymentStats(ApiModel):
    """Aggregates over the completed payments of one event.

    ``revenue_by_hour`` is keyed by the hour (0-23, UTC) of ``paidAt``.
    """

    total_revenue: float
    total_transactions: int
    avg_transaction: float
    payment_method_stats: Dict[str, int]
    revenue_by_hour: Dict[int, float]
