"""JSON-file-backed implementation of DeliveryOutbox."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from orderflow.domain.model.delivery import DeliveryChannel, PendingDelivery
from orderflow.domain.repository.delivery_outbox import DeliveryOutbox


class JsonDeliveryOutbox(DeliveryOutbox):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- DeliveryOutbox interface ---------------------------------------------

    async def append(self, delivery: PendingDelivery) -> PendingDelivery:
        records = self._load_raw()
        delivery.id = max((r["id"] for r in records), default=0) + 1
        records.append(self._to_raw(delivery))
        self._persist_raw(records)
        return delivery

    async def list_pending(self) -> list[PendingDelivery]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["delivered_at"] is None
        ]

    async def save(self, delivery: PendingDelivery) -> None:
        records = self._load_raw()
        for i, raw in enumerate(records):
            if raw["id"] == delivery.id:
                records[i] = self._to_raw(delivery)
                break
        else:
            records.append(self._to_raw(delivery))
        self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(delivery: PendingDelivery) -> dict:
        return {
            "id": delivery.id,
            "order_id": delivery.order_id,
            "channel": delivery.channel.value,
            "last_error": delivery.last_error,
            "attempts": delivery.attempts,
            "created_at": delivery.created_at.isoformat(),
            "delivered_at": delivery.delivered_at.isoformat() if delivery.delivered_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> PendingDelivery:
        return PendingDelivery(
            id=raw["id"],
            order_id=raw["order_id"],
            channel=DeliveryChannel(raw["channel"]),
            last_error=raw["last_error"],
            attempts=raw["attempts"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            delivered_at=(
                datetime.fromisoformat(raw["delivered_at"]) if raw["delivered_at"] else None
            ),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp = self._file_path.with_suffix(".tmp")
        tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
