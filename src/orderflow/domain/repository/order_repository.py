"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Persist a new order and assign its ID.

        The order is durable once this returns: this is the commit point
        of order creation.
        """

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""
