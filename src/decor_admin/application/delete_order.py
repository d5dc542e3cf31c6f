"""Application service: Delete Order use case.

Orders in processing or shipped hold stock that was already deducted;
deleting them would silently lose that history, so only pending and
terminal orders can be removed.
"""

from __future__ import annotations

import logging

from decor_admin.domain.exceptions import EntityNotFoundError, ValidationError
from decor_admin.domain.model.order_status import OrderStatus
from decor_admin.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

_IN_FLIGHT = (OrderStatus.PROCESSING, OrderStatus.SHIPPED)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if order.status in _IN_FLIGHT:
            raise ValidationError(
                f"Cannot delete order #{order_id} while it is {order.status.value}"
            )

        self._order_repo.delete(order_id)
        logger.info("Deleted order #%s (%s)", order_id, order.status.value)
