"""Application service: Show Order use case (query)."""

from __future__ import annotations

from decor_admin.application.dto import OrderDTO, OrderItemDTO
from decor_admin.domain.exceptions import EntityNotFoundError
from decor_admin.domain.model.order import Order
from decor_admin.domain.model.order_status import allowed_next_statuses
from decor_admin.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self.to_dto(order)

    @staticmethod
    def to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_name=order.customer.name,
            status=order.status.value,
            allowed_statuses=[s.value for s in allowed_next_statuses(order.status)],
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    title=item.title,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            subtotal=str(order.subtotal or order.computed_subtotal),
            delivery_fee=str(order.delivery_fee) if order.delivery_fee is not None else "-",
            total_amount=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
