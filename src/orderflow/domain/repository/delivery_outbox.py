"""Abstract store for PendingDelivery records (the delivery outbox)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.delivery import PendingDelivery


class DeliveryOutbox(ABC):

    @abstractmethod
    async def append(self, delivery: PendingDelivery) -> PendingDelivery:
        """Store a new pending delivery and assign its ID."""

    @abstractmethod
    async def list_pending(self) -> list[PendingDelivery]:
        """Return every delivery not yet marked delivered, oldest first."""

    @abstractmethod
    async def save(self, delivery: PendingDelivery) -> None:
        """Persist an updated delivery."""
