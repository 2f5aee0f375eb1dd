"""Tests for the JSON-file stores (tmp_path, real file I/O)."""

import json
from pathlib import Path

import pytest

from orderflow.domain.exceptions import PersistenceFailed, ValidationError
from orderflow.domain.model.delivery import DeliveryChannel, PendingDelivery
from orderflow.domain.model.order import CatalogItemOrdered, Order, OrderItem
from orderflow.domain.model.value_objects import Address, Money, Quantity
from orderflow.infrastructure.persistence.json_basket_repository import JsonBasketRepository
from orderflow.infrastructure.persistence.json_catalog_repository import JsonCatalogRepository
from orderflow.infrastructure.persistence.json_delivery_outbox import JsonDeliveryOutbox
from orderflow.infrastructure.persistence.json_order_repository import JsonOrderRepository


def _order() -> Order:
    return Order.create(
        "B1",
        Address("123 Main St.", "Kent", "OH", "United States", "44240"),
        [
            OrderItem(CatalogItemOrdered(1, "Sweatshirt", "https://cdn.test/1.png"), Money.of("10.00"), Quantity(2)),
            OrderItem(CatalogItemOrdered(2, "Mug", "https://cdn.test/2.png"), Money.of("5.00"), Quantity(1)),
        ],
    )


class TestJsonOrderRepository:

    @pytest.mark.asyncio
    async def test_add_assigns_sequential_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first = await repo.add(_order())
        second = await repo.add(_order())
        assert (first.id, second.id) == (1, 2)

    @pytest.mark.asyncio
    async def test_round_trip_keeps_total(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = await repo.add(_order())

        loaded = await JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)

        assert loaded == order
        assert loaded.total == Money.of("25.00")

    @pytest.mark.asyncio
    async def test_unknown_id_returns_none(self, tmp_path):
        assert await JsonOrderRepository(tmp_path / "orders.json").get_by_id(9) is None

    @pytest.mark.asyncio
    async def test_already_persisted_order_rejected(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = await repo.add(_order())
        with pytest.raises(ValidationError, match="already persisted"):
            await repo.add(order)

    @pytest.mark.asyncio
    async def test_corrupt_store_raises_persistence_failed(self, tmp_path):
        path = tmp_path / "orders.json"
        repo = JsonOrderRepository(path)
        path.write_text("{not json", encoding="utf-8")
        order = _order()
        with pytest.raises(PersistenceFailed):
            await repo.add(order)
        assert order.id is None


class TestJsonBasketRepository:

    @pytest.mark.asyncio
    async def test_find_with_items(self, tmp_path):
        path = tmp_path / "baskets.json"
        path.write_text(json.dumps([
            {
                "id": 42,
                "buyer_id": "B1",
                "items": [
                    {"catalog_item_id": 1, "unit_price": "10.00", "quantity": 2},
                    {"catalog_item_id": 2, "unit_price": "5.00", "quantity": 1},
                ],
            },
        ]))
        basket = await JsonBasketRepository(path).find_with_items(42)
        assert basket.buyer_id == "B1"
        assert [i.catalog_item_id for i in basket.items] == [1, 2]
        assert basket.items[0].unit_price == Money.of("10.00")

    @pytest.mark.asyncio
    async def test_missing_file_or_basket(self, tmp_path):
        repo = JsonBasketRepository(tmp_path / "baskets.json")
        assert await repo.find_with_items(42) is None


class TestJsonCatalogRepository:

    @pytest.mark.asyncio
    async def test_returns_only_requested_ids(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([
            {"id": 1, "name": "Sweatshirt", "picture_uri": "1.png"},
            {"id": 2, "name": "Mug", "picture_uri": "2.png"},
            {"id": 3, "name": "Cup", "picture_uri": "3.png"},
        ]))
        items = await JsonCatalogRepository(path).find_catalog_items([1, 3, 99])
        assert sorted(i.id for i in items) == [1, 3]


class TestJsonDeliveryOutbox:

    @pytest.mark.asyncio
    async def test_pending_until_delivered(self, tmp_path):
        outbox = JsonDeliveryOutbox(tmp_path / "outbox.json")
        delivery = await outbox.append(
            PendingDelivery(id=None, order_id=7, channel=DeliveryChannel.ORDER_QUEUE, last_error="down")
        )
        assert delivery.id == 1

        [pending] = await outbox.list_pending()
        assert pending.order_id == 7
        assert pending.channel is DeliveryChannel.ORDER_QUEUE

        pending.mark_delivered()
        await outbox.save(pending)
        assert await outbox.list_pending() == []

    @pytest.mark.asyncio
    async def test_interrupted_write_keeps_previous_records(self, tmp_path, monkeypatch):
        outbox = JsonDeliveryOutbox(tmp_path / "outbox.json")
        await outbox.append(
            PendingDelivery(id=None, order_id=7, channel=DeliveryChannel.ORDER_STORE, last_error="503")
        )

        def crash(self, target):
            raise OSError("power lost")

        monkeypatch.setattr(Path, "replace", crash)
        with pytest.raises(OSError, match="power lost"):
            await outbox.append(
                PendingDelivery(id=None, order_id=8, channel=DeliveryChannel.ORDER_QUEUE, last_error="down")
            )
        monkeypatch.undo()

        assert [d.order_id for d in await outbox.list_pending()] == [7]
