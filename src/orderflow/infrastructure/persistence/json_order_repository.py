"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
from pathlib import Path

from orderflow.domain.exceptions import PersistenceFailed, ValidationError
from orderflow.domain.model.order import Order
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.infrastructure.serialization import order_from_dict, order_to_dict


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    async def add(self, order: Order) -> Order:
        if order.id is not None:
            raise ValidationError(f"Order #{order.id} is already persisted")

        try:
            orders = self._load_raw()
            new_id = max((o["id"] for o in orders), default=0) + 1
            orders.append({**order_to_dict(order), "id": new_id})
            self._persist_raw(orders)
        except (OSError, ValueError) as exc:
            raise PersistenceFailed(f"Could not write {self._file_path}: {exc}") from exc

        order.assign_id(new_id)
        return order

    async def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return order_from_dict(raw)
        return None

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        # Write-then-rename so a crash never leaves a truncated store.
        tmp = self._file_path.with_suffix(".tmp")
        tmp.write_text(json.dumps(orders, indent=2) + "\n", encoding="utf-8")
        tmp.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
