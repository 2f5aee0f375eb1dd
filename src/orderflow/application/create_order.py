"""Application service: Create Order use case.

Orchestrates checkout: assemble the order from the basket, commit it,
then propagate it downstream.  Persisting the order is the commit
point.  Anything that fails before it aborts cleanly; anything that
fails after it is logged, written to the delivery outbox where it can
be replayed, and reported as a warning; the order stays created.
"""

from __future__ import annotations

from enum import Enum

import structlog

from orderflow.application.dto import (
    AddressSpec,
    DeliveryWarning,
    OrderCreationResult,
)
from orderflow.application.ports import (
    OrderEventPublisher,
    OrderStoreNotifier,
    SecondaryStoreNotifier,
)
from orderflow.domain.exceptions import (
    DeliveryError,
    PersistenceFailed,
    PrimaryNotificationFailed,
    QueuePublishFailed,
)
from orderflow.domain.model.delivery import DeliveryChannel, PendingDelivery
from orderflow.domain.model.order import Order
from orderflow.domain.model.value_objects import Address
from orderflow.domain.repository.delivery_outbox import DeliveryOutbox
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.domain.service.order_assembler import OrderAssembler

logger = structlog.get_logger(__name__)


class OrderCreationStage(Enum):
    VALIDATING = "VALIDATING"
    ASSEMBLED = "ASSEMBLED"
    PERSISTED = "PERSISTED"
    PRIMARY_NOTIFIED = "PRIMARY_NOTIFIED"
    SECONDARY_NOTIFIED = "SECONDARY_NOTIFIED"
    ENQUEUED = "ENQUEUED"
    COMPLETED = "COMPLETED"


class CreateOrderHandler:

    def __init__(
        self,
        assembler: OrderAssembler,
        order_repo: OrderRepository,
        order_store: OrderStoreNotifier,
        secondary_store: SecondaryStoreNotifier,
        publisher: OrderEventPublisher,
        outbox: DeliveryOutbox,
    ) -> None:
        self._assembler = assembler
        self._order_repo = order_repo
        self._order_store = order_store
        self._secondary_store = secondary_store
        self._publisher = publisher
        self._outbox = outbox

    async def handle(self, basket_id: int, shipping_address: AddressSpec) -> OrderCreationResult:
        """Check out basket *basket_id*.

        Raises BasketNotFound, EmptyBasket, CatalogItemMissing or
        PersistenceFailed if the order could not be created.  Once it is
        persisted this method always returns a result; downstream
        failures show up in ``result.warnings``.
        """
        log = logger.bind(basket_id=basket_id)
        stages = [OrderCreationStage.VALIDATING]

        order = await self._assembler.assemble(basket_id, self._to_address(shipping_address))
        stages.append(OrderCreationStage.ASSEMBLED)

        order = await self._persist(order, basket_id)
        stages.append(OrderCreationStage.PERSISTED)
        log = log.bind(order_id=order.id)
        log.info("Order persisted", buyer_id=order.buyer_id, total=str(order.total))

        # --- Past the commit point: nothing below may fail the checkout -------

        warnings: list[DeliveryWarning] = []

        try:
            await self._order_store.notify(order)
        except PrimaryNotificationFailed as exc:
            warnings.append(await self._defer(order, DeliveryChannel.ORDER_STORE, exc))
        else:
            stages.append(OrderCreationStage.PRIMARY_NOTIFIED)

        if await self._secondary_store.notify_best_effort(order):
            stages.append(OrderCreationStage.SECONDARY_NOTIFIED)

        try:
            await self._publisher.publish(order)
        except QueuePublishFailed as exc:
            warnings.append(await self._defer(order, DeliveryChannel.ORDER_QUEUE, exc))
        else:
            stages.append(OrderCreationStage.ENQUEUED)

        stages.append(OrderCreationStage.COMPLETED)
        log.info("Order creation completed", pending_channels=len(warnings))

        return OrderCreationResult(
            order_id=order.id,  # type: ignore[arg-type]
            buyer_id=order.buyer_id,
            total=str(order.total),
            item_count=len(order.order_items),
            stages=tuple(stage.value for stage in stages),
            warnings=tuple(warnings),
        )

    # --- Internal helpers -----------------------------------------------------

    async def _persist(self, order: Order, basket_id: int) -> Order:
        try:
            return await self._order_repo.add(order)
        except PersistenceFailed:
            raise
        except Exception as exc:
            raise PersistenceFailed(
                f"Could not persist order for basket #{basket_id}: {exc}"
            ) from exc

    async def _defer(
        self, order: Order, channel: DeliveryChannel, exc: DeliveryError
    ) -> DeliveryWarning:
        """Record a failed delivery in the outbox for later replay."""
        log = logger.bind(order_id=order.id, channel=channel.value)
        log.warning("Downstream delivery failed, deferring", error=str(exc))
        try:
            await self._outbox.append(
                PendingDelivery(
                    id=None,
                    order_id=order.id,  # type: ignore[arg-type]
                    channel=channel,
                    last_error=str(exc),
                )
            )
        except Exception as outbox_exc:
            # Caller still sees the failure through the returned warning.
            log.error("Could not record pending delivery", error=str(outbox_exc))
        return DeliveryWarning(channel=channel.value, error=str(exc))

    @staticmethod
    def _to_address(spec: AddressSpec) -> Address:
        return Address(
            street=spec.street,
            city=spec.city,
            state=spec.state,
            country=spec.country,
            zip_code=spec.zip_code,
        )
