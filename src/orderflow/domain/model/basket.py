"""Basket aggregate — the buyer's pending selection.

Owned by the basket context; ordering only reads it at checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from orderflow.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class BasketItem:
    catalog_item_id: int
    unit_price: Money  # the price the buyer saw when adding the item
    quantity: Quantity


@dataclass
class Basket:
    id: int
    buyer_id: str
    items: list[BasketItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def catalog_item_ids(self) -> list[int]:
        """Distinct catalog item ids, in first-seen order."""
        return list(dict.fromkeys(item.catalog_item_id for item in self.items))
