"""HTTP adapters for the two order stores.

Both POST JSON with ``httpx``.  A client is opened per call and closed on
every exit path; each request carries the configured timeout so an
unresponsive store cannot stall checkout.
"""

from __future__ import annotations

import json

import httpx
import structlog

from orderflow.application.ports import OrderStoreNotifier, SecondaryStoreNotifier
from orderflow.domain.exceptions import (
    PrimaryNotificationFailed,
    SecondaryNotificationFailed,
)
from orderflow.domain.model.order import Order
from orderflow.infrastructure.serialization import (
    address_to_dict,
    order_items_to_list,
    order_to_json,
)

logger = structlog.get_logger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


class HttpOrderStoreNotifier(OrderStoreNotifier):
    """Sends the full order to the order store, keyed by order id."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def notify(self, order: Order) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._url,
                    params={"name": f"order{order.id}"},
                    content=order_to_json(order),
                    headers=_JSON_HEADERS,
                )
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PrimaryNotificationFailed(
                f"Order store rejected order #{order.id}: {exc}"
            ) from exc

        logger.info("Order stored", order_id=order.id, status=response.status_code)


class HttpSecondaryStoreNotifier(SecondaryStoreNotifier):
    """Sends an order summary to the secondary store, best effort."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def notify_best_effort(self, order: Order) -> bool:
        try:
            await self._send(order)
        except Exception as exc:
            logger.warning(
                "Secondary store notification failed",
                order_id=order.id,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return False
        return True

    async def _send(self, order: Order) -> None:
        summary = {
            "id": order.id,
            "shipToAddress": json.dumps(address_to_dict(order.ship_to_address)),
            "total": str(order.total.amount),
            "items": json.dumps(order_items_to_list(order.order_items)),
        }
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.post(self._url, json=summary)
        if response.is_error:
            raise SecondaryNotificationFailed(
                f"Secondary store answered {response.status_code} for order #{order.id}"
            )
        logger.info("Order summary stored", order_id=order.id)
