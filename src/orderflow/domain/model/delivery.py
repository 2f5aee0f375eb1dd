"""Pending delivery — an outbox record for a committed order whose
propagation to a downstream channel failed and must be replayed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class DeliveryChannel(Enum):
    ORDER_STORE = "ORDER_STORE"
    ORDER_QUEUE = "ORDER_QUEUE"


@dataclass
class PendingDelivery:

    id: int | None
    order_id: int
    channel: DeliveryChannel
    last_error: str
    attempts: int = 1
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    delivered_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.delivered_at is None

    def record_failure(self, error: str) -> None:
        self.attempts += 1
        self.last_error = error

    def mark_delivered(self) -> None:
        self.attempts += 1
        self.delivered_at = datetime.now(timezone.utc)
