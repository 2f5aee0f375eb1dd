"""JSON shapes of the Order aggregate.

One shape is shared by the order store, the secondary store, the queue
message and the JSON-file repository, so a consumer sees the same
document wherever it reads an order.  Keys are camelCase; money amounts
are decimal strings.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from typing import Any

from orderflow.domain.model.order import CatalogItemOrdered, Order, OrderItem
from orderflow.domain.model.value_objects import Address, Money, Quantity


def address_to_dict(address: Address) -> dict[str, str]:
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "country": address.country,
        "zipCode": address.zip_code,
    }


def address_from_dict(raw: dict[str, Any]) -> Address:
    return Address(
        street=raw["street"],
        city=raw["city"],
        state=raw["state"],
        country=raw["country"],
        zip_code=raw["zipCode"],
    )


def order_items_to_list(items: tuple[OrderItem, ...]) -> list[dict[str, Any]]:
    return [
        {
            "itemOrdered": {
                "catalogItemId": item.item_ordered.catalog_item_id,
                "productName": item.item_ordered.product_name,
                "pictureUri": item.item_ordered.picture_uri,
            },
            "unitPrice": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
            "units": item.units.value,
        }
        for item in items
    ]


def order_to_dict(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "buyerId": order.buyer_id,
        "orderDate": order.order_date.isoformat(),
        "shipToAddress": address_to_dict(order.ship_to_address),
        "orderItems": order_items_to_list(order.order_items),
    }


def order_from_dict(raw: dict[str, Any]) -> Order:
    items = tuple(
        OrderItem(
            item_ordered=CatalogItemOrdered(
                catalog_item_id=i["itemOrdered"]["catalogItemId"],
                product_name=i["itemOrdered"]["productName"],
                picture_uri=i["itemOrdered"]["pictureUri"],
            ),
            unit_price=Money(Decimal(i["unitPrice"]), i.get("currency", "USD")),
            units=Quantity(i["units"]),
        )
        for i in raw["orderItems"]
    )
    return Order(
        id=raw["id"],
        buyer_id=raw["buyerId"],
        ship_to_address=address_from_dict(raw["shipToAddress"]),
        order_items=items,
        order_date=datetime.fromisoformat(raw["orderDate"]),
    )


def order_to_json(order: Order) -> str:
    return json.dumps(order_to_dict(order))
