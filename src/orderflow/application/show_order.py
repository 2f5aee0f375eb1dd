"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderflow.application.dto import OrderDTO, OrderItemDTO
from orderflow.domain.exceptions import EntityNotFoundError
from orderflow.domain.model.order import Order
from orderflow.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    async def handle(self, order_id: int) -> OrderDTO:
        order = await self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self._to_dto(order)

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            buyer_id=order.buyer_id,
            ship_to=str(order.ship_to_address),
            items=[
                OrderItemDTO(
                    product_name=item.item_ordered.product_name,
                    picture_uri=item.item_ordered.picture_uri,
                    units=item.units.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.order_items
            ],
            total=str(order.total),
            order_date=order.order_date.strftime("%Y-%m-%d %H:%M UTC"),
        )
