"""Domain service: Stock Validator.

Checks an order against the catalog's current stock and reports the
shortfalls.  Lines that name the same product are totalled first, since
the deductor takes them from one stock count.  Reads the repository at
call time so two orders competing for the same product see each
other's deductions.
"""

from __future__ import annotations

import logging

from decor_admin.domain.model.order import Order, OrderItem
from decor_admin.domain.model.stock import (
    SkippedItem,
    StockShortfall,
    StockValidationResult,
    UnresolvedItemPolicy,
)
from decor_admin.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockValidator:

    def __init__(
        self,
        product_repo: ProductRepository,
        on_unresolved_item: UnresolvedItemPolicy = UnresolvedItemPolicy.SKIP,
    ) -> None:
        self._product_repo = product_repo
        self._policy = on_unresolved_item

    def validate(self, order: Order) -> StockValidationResult:
        """Return the shortfalls for *order* without mutating anything.

        - item with no product reference: skipped under the SKIP policy,
          a shortfall with ``available=0`` under FAIL
        - product not found: shortfall with ``available=0``
        - ``stock`` below the order's total for that product: shortfall
          with ``available=stock``
        """
        shortfalls: list[StockShortfall] = []
        skipped: list[SkippedItem] = []
        # product_id -> (first line naming it, total requested)
        wanted: dict[str, tuple[OrderItem, int]] = {}

        for item in order.items:
            if not item.has_product_reference:
                if self._policy is UnresolvedItemPolicy.SKIP:
                    logger.warning(
                        "Order #%s item '%s' has no product reference, skipping",
                        order.id, item.title,
                    )
                    skipped.append(SkippedItem.for_item(item, "missing product reference"))
                else:
                    shortfalls.append(_shortfall(item, item.quantity.value, available=0))
                continue

            first, total = wanted.get(item.product_id, (item, 0))
            wanted[item.product_id] = (first, total + item.quantity.value)

        for product_id, (item, requested) in wanted.items():
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                shortfalls.append(_shortfall(item, requested, available=0))
            elif product.stock < requested:
                shortfalls.append(_shortfall(item, requested, available=product.stock))

        result = StockValidationResult(shortfalls=shortfalls, skipped=skipped)
        logger.debug(
            "Stock validation for order #%s: valid=%s shortfalls=%d skipped=%d",
            order.id, result.valid, len(shortfalls), len(skipped),
        )
        return result


def _shortfall(item: OrderItem, requested: int, available: int) -> StockShortfall:
    return StockShortfall(
        product_id=item.product_id,
        title=item.title,
        requested=requested,
        available=available,
    )
