"""NATS JetStream adapter for order-created events.

The queue is a JetStream stream with work-queue retention, named and
subscribed to ``queue_name``.  Publishing is at-least-once: a retried
publish whose earlier attempt did land may produce a duplicate, so each
message carries a ``Nats-Msg-Id`` of ``order-<id>`` for the stream's
duplicate window, and consumers must still dedupe on ``orderId``.
"""

from __future__ import annotations

import asyncio
import base64
import json

import nats
import nats.errors
import structlog
from nats.aio.client import Client as NATSClient
from nats.js import JetStreamContext
from nats.js.api import RetentionPolicy, StreamConfig
from nats.js.errors import NotFoundError

from orderflow.application.ports import OrderEventPublisher
from orderflow.domain.exceptions import QueuePublishFailed
from orderflow.domain.model.order import Order
from orderflow.infrastructure.serialization import order_to_json

logger = structlog.get_logger(__name__)

# Failures worth another attempt: lost connections, timeouts, no server.
TRANSIENT_ERRORS = (nats.errors.Error, asyncio.TimeoutError, OSError)


class NatsConnection:
    """Lazily opened NATS connection shared by the publishers of one process."""

    def __init__(
        self,
        url: str,
        token: str | None = None,
        credentials_file: str | None = None,
        timeout: float = 5.0,
    ) -> None:
        self._url = url
        self._token = token
        self._credentials_file = credentials_file
        self._timeout = timeout
        self._client: NATSClient | None = None
        self._lock = asyncio.Lock()

    async def jetstream(self) -> JetStreamContext:
        async with self._lock:
            if self._client is None or self._client.is_closed:
                self._client = await nats.connect(
                    servers=[self._url],
                    token=self._token,
                    user_credentials=self._credentials_file,
                    connect_timeout=self._timeout,
                    allow_reconnect=False,
                )
            return self._client.jetstream(timeout=self._timeout)

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.close()
        self._client = None


class NatsOrderEventPublisher(OrderEventPublisher):

    def __init__(
        self,
        connection: NatsConnection,
        queue_name: str,
        retry_attempts: int = 3,
        retry_delay: float = 5.0,
        timeout: float = 5.0,
        encoding: str = "base64",
    ) -> None:
        self._connection = connection
        self._queue_name = queue_name
        self._retry_attempts = retry_attempts
        self._retry_delay = retry_delay
        self._timeout = timeout
        self._encoding = encoding
        self._queue_ready = False

    async def publish(self, order: Order) -> None:
        """Enqueue an order-created event with fixed-interval retry."""
        payload = self.encode_message(order)
        headers = {"Nats-Msg-Id": f"order-{order.id}"}
        log = logger.bind(order_id=order.id, queue=self._queue_name)

        for attempt in range(1, self._retry_attempts + 1):
            try:
                js = await self._connection.jetstream()
                await self._ensure_queue(js)
                ack = await js.publish(
                    self._queue_name,
                    payload,
                    timeout=self._timeout,
                    headers=headers,
                )
            except TRANSIENT_ERRORS as exc:
                if attempt == self._retry_attempts:
                    raise QueuePublishFailed(
                        order.id,  # type: ignore[arg-type]
                        attempt,
                        str(exc) or type(exc).__name__,
                    ) from exc
                log.warning("Queue publish failed, retrying", attempt=attempt, error=str(exc))
                await asyncio.sleep(self._retry_delay)
            else:
                log.info("Order event enqueued", attempt=attempt, seq=ack.seq, duplicate=ack.duplicate)
                return

    def encode_message(self, order: Order) -> bytes:
        body = json.dumps({"orderId": order.id, "orderJson": order_to_json(order)}).encode("utf-8")
        if self._encoding == "base64":
            return base64.b64encode(body)
        return body

    async def _ensure_queue(self, js: JetStreamContext) -> None:
        """Create the stream if it does not exist yet (once per publisher)."""
        if self._queue_ready:
            return
        try:
            await js.stream_info(self._queue_name)
        except NotFoundError:
            await js.add_stream(
                StreamConfig(
                    name=self._queue_name,
                    subjects=[self._queue_name],
                    retention=RetentionPolicy.WORK_QUEUE,
                )
            )
            logger.info("Queue created", queue=self._queue_name)
        self._queue_ready = True
