"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

The handlers are handed out from async context managers that own the
NATS connection, so it is closed on every exit path.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.redeliver_orders import RedeliverOrdersHandler
from orderflow.domain.service.order_assembler import OrderAssembler
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.http.order_store import (
    HttpOrderStoreNotifier,
    HttpSecondaryStoreNotifier,
)
from orderflow.infrastructure.messaging.nats_order_publisher import (
    NatsConnection,
    NatsOrderEventPublisher,
)
from orderflow.infrastructure.persistence.json_basket_repository import (
    JsonBasketRepository,
)
from orderflow.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from orderflow.infrastructure.persistence.json_delivery_outbox import (
    JsonDeliveryOutbox,
)
from orderflow.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderflow.infrastructure.uri_composer import CatalogUriComposer


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def delivery_outbox(settings: Settings) -> JsonDeliveryOutbox:
    return JsonDeliveryOutbox(settings.data_dir / "outbox.json")


def order_store_notifier(settings: Settings) -> HttpOrderStoreNotifier:
    return HttpOrderStoreNotifier(
        settings.require("order_store_url"), timeout=settings.http_timeout
    )


def secondary_store_notifier(settings: Settings) -> HttpSecondaryStoreNotifier:
    return HttpSecondaryStoreNotifier(
        settings.require("secondary_store_url"), timeout=settings.http_timeout
    )


def nats_connection(settings: Settings) -> NatsConnection:
    return NatsConnection(
        settings.queue_url,
        token=settings.queue_token.get_secret_value() if settings.queue_token else None,
        credentials_file=(
            str(settings.queue_credentials_file) if settings.queue_credentials_file else None
        ),
        timeout=settings.queue_timeout,
    )


def order_event_publisher(
    settings: Settings, connection: NatsConnection
) -> NatsOrderEventPublisher:
    return NatsOrderEventPublisher(
        connection,
        queue_name=settings.queue_name,
        retry_attempts=settings.queue_retry_attempts,
        retry_delay=settings.queue_retry_delay,
        timeout=settings.queue_timeout,
        encoding=settings.queue_message_encoding,
    )


@asynccontextmanager
async def order_creation(settings: Settings) -> AsyncIterator[CreateOrderHandler]:
    order_store = order_store_notifier(settings)
    secondary_store = secondary_store_notifier(settings)
    connection = nats_connection(settings)
    try:
        yield CreateOrderHandler(
            assembler=OrderAssembler(
                basket_repo=JsonBasketRepository(settings.data_dir / "baskets.json"),
                catalog_repo=JsonCatalogRepository(settings.data_dir / "catalog.json"),
                uri_composer=CatalogUriComposer(settings.catalog_base_url),
            ),
            order_repo=order_repository(settings),
            order_store=order_store,
            secondary_store=secondary_store,
            publisher=order_event_publisher(settings, connection),
            outbox=delivery_outbox(settings),
        )
    finally:
        await connection.close()


@asynccontextmanager
async def order_redelivery(settings: Settings) -> AsyncIterator[RedeliverOrdersHandler]:
    order_store = order_store_notifier(settings)
    connection = nats_connection(settings)
    try:
        yield RedeliverOrdersHandler(
            outbox=delivery_outbox(settings),
            order_repo=order_repository(settings),
            order_store=order_store,
            publisher=order_event_publisher(settings, connection),
        )
    finally:
        await connection.close()
