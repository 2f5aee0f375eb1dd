"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AddressSpec:
    """Input: shipping address as typed by the buyer."""

    street: str
    city: str
    state: str
    country: str
    zip_code: str


@dataclass(frozen=True)
class DeliveryWarning:
    """A downstream channel that failed after the order was committed."""

    channel: str
    error: str


@dataclass(frozen=True)
class OrderCreationResult:
    """Output: outcome of checking out a basket.

    Only returned once the order is persisted; ``warnings`` lists the
    downstream channels that still need attention.
    """

    order_id: int
    buyer_id: str
    total: str
    item_count: int
    stages: tuple[str, ...]
    warnings: tuple[DeliveryWarning, ...] = ()

    @property
    def fully_delivered(self) -> bool:
        return not self.warnings


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item as displayed to the user."""

    product_name: str
    picture_uri: str
    units: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    buyer_id: str
    ship_to: str
    items: list[OrderItemDTO]
    total: str
    order_date: str


@dataclass(frozen=True)
class RedeliveryReport:
    """Output: result of replaying the delivery outbox."""

    delivered: int
    failed: int
    skipped: int
