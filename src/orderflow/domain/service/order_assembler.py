"""Domain service: Order Assembly.

Builds an Order from a basket and the catalog items it references.  It
lives in the domain layer because capturing the item snapshot (name,
picture, basket price) is a core business rule.

Two read queries and a pure transformation: nothing is written and no
downstream system is contacted, so every failure here leaves no trace.
"""

from __future__ import annotations

from orderflow.domain.exceptions import BasketNotFound, CatalogItemMissing, EmptyBasket
from orderflow.domain.model.order import CatalogItemOrdered, Order, OrderItem
from orderflow.domain.model.value_objects import Address
from orderflow.domain.repository.basket_repository import BasketRepository
from orderflow.domain.repository.catalog_repository import CatalogRepository
from orderflow.domain.service.uri_composer import UriComposer


class OrderAssembler:

    def __init__(
        self,
        basket_repo: BasketRepository,
        catalog_repo: CatalogRepository,
        uri_composer: UriComposer,
    ) -> None:
        self._basket_repo = basket_repo
        self._catalog_repo = catalog_repo
        self._uri_composer = uri_composer

    async def assemble(self, basket_id: int, shipping_address: Address) -> Order:
        """Turn basket *basket_id* into a new, unpersisted Order.

        Steps:
        1. Load the basket (fail if absent or empty).
        2. Load the distinct catalog items it references in one query
           (fail if any is missing).
        3. Snapshot each catalog item and pair it with the basket price.
        4. Build the order; items priced in different currencies are
           rejected here, before anything is persisted.
        """
        basket = await self._basket_repo.find_with_items(basket_id)
        if basket is None:
            raise BasketNotFound(basket_id)
        if basket.is_empty:
            raise EmptyBasket(basket_id)

        wanted = basket.catalog_item_ids()
        catalog = {
            item.id: item
            for item in await self._catalog_repo.find_catalog_items(wanted)
        }
        missing = sorted(set(wanted) - catalog.keys())
        if missing:
            raise CatalogItemMissing(missing)

        items: list[OrderItem] = []
        for basket_item in basket.items:
            catalog_item = catalog[basket_item.catalog_item_id]
            items.append(
                OrderItem(
                    item_ordered=CatalogItemOrdered(
                        catalog_item_id=catalog_item.id,
                        product_name=catalog_item.name,
                        picture_uri=self._uri_composer.compose_picture_uri(
                            catalog_item.picture_uri
                        ),
                    ),
                    unit_price=basket_item.unit_price,  # <-- price the buyer saw
                    units=basket_item.quantity,
                )
            )

        return Order.create(
            buyer_id=basket.buyer_id,
            ship_to_address=shipping_address,
            items=items,
        )
