"""Application service: List Orders use case (query with filters)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from decor_admin.application.dto import OrderDTO
from decor_admin.application.show_order import ShowOrderHandler
from decor_admin.domain.model.order import Order
from decor_admin.domain.model.order_status import OrderStatus
from decor_admin.domain.repository.order_repository import OrderRepository


@dataclass(frozen=True)
class OrderFilters:
    """All fields optional; set fields are AND-ed together."""

    status: OrderStatus | None = None
    product_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None

    def matches(self, order: Order) -> bool:
        if self.status is not None and order.status != self.status:
            return False
        if self.product_id is not None and not order.contains_product(self.product_id):
            return False
        if self.start_date is not None and order.created_at < self.start_date:
            return False
        if self.end_date is not None and order.created_at > self.end_date:
            return False

        total = order.total.amount
        if self.min_amount is not None and total < self.min_amount:
            return False
        if self.max_amount is not None and total > self.max_amount:
            return False
        return True


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, filters: OrderFilters | None = None) -> list[OrderDTO]:
        """Return matching orders, newest first."""
        filters = filters or OrderFilters()
        orders = [o for o in self._order_repo.list_all() if filters.matches(o)]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return [ShowOrderHandler.to_dto(o) for o in orders]
