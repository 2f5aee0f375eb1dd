"""Outbound ports of the application layer.

The handlers talk to downstream systems only through these interfaces;
HTTP and NATS implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.order import Order


class OrderStoreNotifier(ABC):

    @abstractmethod
    async def notify(self, order: Order) -> None:
        """Push the full order to the order store.

        Raises PrimaryNotificationFailed on any failure.
        """


class SecondaryStoreNotifier(ABC):

    @abstractmethod
    async def notify_best_effort(self, order: Order) -> bool:
        """Push an order summary; return False instead of raising on failure."""


class OrderEventPublisher(ABC):

    @abstractmethod
    async def publish(self, order: Order) -> None:
        """Enqueue an order-created event.

        Raises QueuePublishFailed once the retry budget is spent.
        """
