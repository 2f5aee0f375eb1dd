"""Abstract repository for the Basket aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Ordering only ever reads baskets.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.basket import Basket


class BasketRepository(ABC):

    @abstractmethod
    async def find_with_items(self, basket_id: int) -> Basket | None:
        """Return the basket with its items loaded, or None."""
