"""Application service: fill in subtotal / delivery fee on legacy orders.

Orders saved before totals were stored only carry ``total_amount`` (if
anything).  The delivery fee is inferred as ``total_amount - subtotal``
when that difference is plausible, otherwise the configured default is
used.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from decor_admin.domain.model.order import Order
from decor_admin.domain.model.value_objects import Money
from decor_admin.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

MAX_INFERRED_DELIVERY_FEE = Decimal("1000")


class RecalculateTotalsHandler:

    def __init__(self, order_repo: OrderRepository, default_delivery_fee: Money) -> None:
        self._order_repo = order_repo
        self._default_fee = default_delivery_fee

    def handle(self) -> int:
        """Update every order lacking totals; return how many changed."""
        updated = 0
        for order in self._order_repo.list_all():
            if order.has_totals:
                continue
            if self._order_repo.update(order.id, self._apply_totals):  # type: ignore[arg-type]
                updated += 1
        return updated

    def _apply_totals(self, order: Order) -> bool:
        if order.has_totals:
            return False

        subtotal = order.computed_subtotal
        fee = Money(self._default_fee.amount, subtotal.currency)
        if order.total_amount is not None:
            inferred = order.total_amount.amount - subtotal.amount
            if Decimal("0") <= inferred <= MAX_INFERRED_DELIVERY_FEE:
                fee = Money(inferred, subtotal.currency)

        order.apply_delivery_fee(fee)
        logger.info(
            "Order #%s: subtotal=%s delivery_fee=%s", order.id, order.subtotal, fee
        )
        return True
