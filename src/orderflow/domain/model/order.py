"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its order items.  Items are
snapshots taken at checkout: later catalog edits never reach a
historical order.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError, dataclass, field
from datetime import datetime, timezone

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.value_objects import Address, Money, Quantity


@dataclass(frozen=True)
class CatalogItemOrdered:
    """Display data of a catalog item, copied at order-creation time."""

    catalog_item_id: int
    product_name: str
    picture_uri: str  # absolute


@dataclass(frozen=True)
class OrderItem:
    """One ordered product.

    ``unit_price`` comes from the basket, not the catalog, so the order
    keeps the price the buyer actually saw.
    """

    item_ordered: CatalogItemOrdered
    unit_price: Money
    units: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.units.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.create()`` for new orders — it enforces all invariants.
    The ``__init__`` stays simple so the repository can reconstitute
    persisted orders without re-validating.
    """

    id: int | None
    buyer_id: str
    ship_to_address: Address
    order_items: tuple[OrderItem, ...]
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        object.__setattr__(self, "order_items", tuple(self.order_items))

    def __setattr__(self, name: str, value: object) -> None:
        if name == "order_items" and "order_items" in self.__dict__:
            raise FrozenInstanceError("cannot assign to field 'order_items'")
        super().__setattr__(name, value)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        buyer_id: str,
        ship_to_address: Address,
        items: list[OrderItem],
    ) -> Order:
        """Create a new, not yet persisted order."""
        if not buyer_id or not buyer_id.strip():
            raise ValidationError("Buyer id is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        currencies = {item.unit_price.currency for item in items}
        if len(currencies) > 1:
            raise ValidationError(
                f"Order items mix currencies: {', '.join(sorted(currencies))}"
            )

        return Order(
            id=None,
            buyer_id=buyer_id.strip(),
            ship_to_address=ship_to_address,
            order_items=tuple(items),
        )

    # --- Identity -------------------------------------------------------------

    def assign_id(self, order_id: int) -> None:
        """Called by the repository on first persist; never again."""
        if self.id is not None:
            raise ValidationError(
                f"Order already has id #{self.id}, cannot reassign to #{order_id}"
            )
        self.id = order_id

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        if not self.order_items:
            return Money.zero()
        result = Money.zero(self.order_items[0].unit_price.currency)
        for item in self.order_items:
            result = result + item.line_total
        return result
