"""Unit tests for the Order aggregate and its invariants."""

from dataclasses import FrozenInstanceError

import pytest

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.order import CatalogItemOrdered, Order, OrderItem
from orderflow.domain.model.value_objects import Address, Money, Quantity

ADDRESS = Address("123 Main St.", "Kent", "OH", "United States", "44240")


def _make_item(
    catalog_item_id: int = 1, qty: int = 1, price: str = "15.00", currency: str = "USD"
) -> OrderItem:
    """Helper to build a valid order item."""
    return OrderItem(
        item_ordered=CatalogItemOrdered(
            catalog_item_id=catalog_item_id,
            product_name=f"Product {catalog_item_id}",
            picture_uri=f"https://cdn.test/{catalog_item_id}.png",
        ),
        unit_price=Money.of(price, currency),
        units=Quantity(qty),
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create("B1", ADDRESS, [_make_item(qty=2, price="10.00")])
        assert order.buyer_id == "B1"
        assert order.ship_to_address == ADDRESS
        assert len(order.order_items) == 1
        assert order.total == Money.of("20.00")

    def test_id_is_none_for_new_orders(self):
        order = Order.create("B1", ADDRESS, [_make_item()])
        assert order.id is None  # assigned by repository

    def test_order_date_is_utc(self):
        order = Order.create("B1", ADDRESS, [_make_item()])
        assert order.order_date.utcoffset().total_seconds() == 0

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("B1", ADDRESS, [])

    def test_blank_buyer_rejected(self):
        with pytest.raises(ValidationError, match="Buyer id"):
            Order.create("  ", ADDRESS, [_make_item()])

    def test_mixed_currencies_rejected(self):
        with pytest.raises(ValidationError, match="EUR, USD"):
            Order.create("B1", ADDRESS, [_make_item(1), _make_item(2, currency="EUR")])


class TestOrderTotal:

    def test_total_is_sum_of_line_items(self):
        order = Order.create("B1", ADDRESS, [
            _make_item(1, qty=2, price="10.00"),
            _make_item(2, qty=1, price="5.00"),
        ])
        assert order.total == Money.of("25.00")

    def test_total_recomputes_identically(self):
        order = Order.create("B1", ADDRESS, [_make_item(qty=3, price="0.10")])
        assert order.total == order.total == Money.of("0.30")

    def test_free_items_allowed(self):
        order = Order.create("B1", ADDRESS, [_make_item(price="0")])
        assert str(order.total) == "$0.00"

    def test_total_in_items_currency(self):
        order = Order.create("B1", ADDRESS, [
            _make_item(1, qty=2, price="10.00", currency="EUR"),
            _make_item(2, qty=1, price="5.00", currency="EUR"),
        ])
        assert order.total == Money.of("25.00", "EUR")


class TestOrderImmutability:

    def test_items_are_a_tuple(self):
        items = [_make_item()]
        order = Order.create("B1", ADDRESS, items)
        items.append(_make_item(2))
        assert len(order.order_items) == 1
        assert isinstance(order.order_items, tuple)

    def test_items_cannot_be_reassigned(self):
        order = Order.create("B1", ADDRESS, [_make_item()])
        with pytest.raises(FrozenInstanceError):
            order.order_items = ()  # type: ignore[misc]
        assert len(order.order_items) == 1

    def test_reconstituted_items_become_a_tuple(self):
        order = Order(id=3, buyer_id="B1", ship_to_address=ADDRESS, order_items=[_make_item()])  # type: ignore[arg-type]
        assert isinstance(order.order_items, tuple)

    def test_item_snapshot_is_frozen(self):
        item = _make_item()
        with pytest.raises(FrozenInstanceError):
            item.unit_price = Money.of("1.00")  # type: ignore[misc]


class TestOrderIdentity:

    def test_assign_id_once(self):
        order = Order.create("B1", ADDRESS, [_make_item()])
        order.assign_id(7)
        assert order.id == 7

    def test_reassign_rejected(self):
        order = Order.create("B1", ADDRESS, [_make_item()])
        order.assign_id(7)
        with pytest.raises(ValidationError, match="cannot reassign"):
            order.assign_id(8)
        assert order.id == 7


class TestOrderItem:

    def test_line_total_calculation(self):
        item = _make_item(qty=3, price="15.00")
        assert item.line_total == Money.of("45.00")
