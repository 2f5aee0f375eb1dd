"""Application service: Redeliver Orders use case.

Replays the delivery outbox: every committed order whose push to the
order store or the queue failed at checkout is sent again through the
same port.  Successful records are marked delivered; failures stay
pending with their attempt count bumped.
"""

from __future__ import annotations

import structlog

from orderflow.application.dto import RedeliveryReport
from orderflow.application.ports import OrderEventPublisher, OrderStoreNotifier
from orderflow.domain.exceptions import DeliveryError
from orderflow.domain.model.delivery import DeliveryChannel, PendingDelivery
from orderflow.domain.model.order import Order
from orderflow.domain.repository.delivery_outbox import DeliveryOutbox
from orderflow.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class RedeliverOrdersHandler:

    def __init__(
        self,
        outbox: DeliveryOutbox,
        order_repo: OrderRepository,
        order_store: OrderStoreNotifier,
        publisher: OrderEventPublisher,
    ) -> None:
        self._outbox = outbox
        self._order_repo = order_repo
        self._order_store = order_store
        self._publisher = publisher

    async def handle(self) -> RedeliveryReport:
        delivered = failed = skipped = 0

        for delivery in await self._outbox.list_pending():
            log = logger.bind(
                delivery_id=delivery.id,
                order_id=delivery.order_id,
                channel=delivery.channel.value,
            )
            order = await self._order_repo.get_by_id(delivery.order_id)
            if order is None:
                log.warning("Pending delivery references unknown order, skipping")
                skipped += 1
                continue

            try:
                await self._send(delivery, order)
            except DeliveryError as exc:
                delivery.record_failure(str(exc))
                log.warning("Redelivery failed", attempts=delivery.attempts, error=str(exc))
                failed += 1
            else:
                delivery.mark_delivered()
                log.info("Redelivered", attempts=delivery.attempts)
                delivered += 1
            await self._outbox.save(delivery)

        return RedeliveryReport(delivered=delivered, failed=failed, skipped=skipped)

    async def _send(self, delivery: PendingDelivery, order: Order) -> None:
        if delivery.channel is DeliveryChannel.ORDER_STORE:
            await self._order_store.notify(order)
        else:
            await self._publisher.publish(order)
