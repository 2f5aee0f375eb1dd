"""JSON-file-backed, read-only implementation of BasketRepository."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from orderflow.domain.model.basket import Basket, BasketItem
from orderflow.domain.model.value_objects import Money, Quantity
from orderflow.domain.repository.basket_repository import BasketRepository


class JsonBasketRepository(BasketRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    async def find_with_items(self, basket_id: int) -> Basket | None:
        if not self._file_path.exists():
            return None
        for raw in json.loads(self._file_path.read_text(encoding="utf-8")):
            if raw["id"] == basket_id:
                return self._to_domain(raw)
        return None

    @staticmethod
    def _to_domain(raw: dict) -> Basket:
        return Basket(
            id=raw["id"],
            buyer_id=raw["buyer_id"],
            items=[
                BasketItem(
                    catalog_item_id=i["catalog_item_id"],
                    unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                    quantity=Quantity(i["quantity"]),
                )
                for i in raw.get("items", [])
            ],
        )
