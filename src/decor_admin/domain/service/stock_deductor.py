"""Domain service: Stock Deductor.

Decrements each product's stock by the quantity ordered.  Every
decrement is an atomic read-modify-write on the repository, and a
failure part-way through an order restores the decrements already
applied, so an order is never left half-deducted.
"""

from __future__ import annotations

import logging

from decor_admin.domain.exceptions import EntityNotFoundError
from decor_admin.domain.model.order import Order
from decor_admin.domain.model.stock import (
    DeductionReport,
    SkippedItem,
    StockDeduction,
    UnresolvedItemPolicy,
)
from decor_admin.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockDeductor:

    def __init__(
        self,
        product_repo: ProductRepository,
        on_unresolved_item: UnresolvedItemPolicy = UnresolvedItemPolicy.SKIP,
    ) -> None:
        self._product_repo = product_repo
        self._policy = on_unresolved_item

    def deduct(self, order: Order) -> DeductionReport:
        """Deduct stock for every resolvable item of *order*.

        Expects a prior successful validation.  The repository still
        refuses to go below zero: if stock moved in between, the
        resulting InsufficientStockError is raised after rollback.
        """
        report = DeductionReport()
        logger.info("Deducting stock for order #%s (%d items)", order.id, len(order.items))

        try:
            for item in order.items:
                if not item.has_product_reference:
                    self._unresolved(order, report, SkippedItem.for_item(item, "missing product reference"))
                    continue

                qty = item.quantity.value
                new_stock = self._product_repo.adjust_stock(item.product_id, -qty)
                if new_stock is None:
                    self._unresolved(order, report, SkippedItem.for_item(item, "product not found"))
                    continue

                report.deducted.append(
                    StockDeduction(product_id=item.product_id, quantity=qty, new_stock=new_stock)
                )
                logger.debug(
                    "Product %s: -%d -> stock %d", item.product_id, qty, new_stock
                )
        except Exception:
            logger.error(
                "Stock deduction for order #%s failed after %d items, rolling back",
                order.id, len(report.deducted),
            )
            self.restore(report)
            raise

        logger.info(
            "Stock deduction for order #%s complete: %d deducted, %d skipped",
            order.id, len(report.deducted), len(report.skipped),
        )
        return report

    def restore(self, report: DeductionReport) -> None:
        """Give back every quantity recorded in *report*."""
        for deduction in reversed(report.deducted):
            self._product_repo.adjust_stock(deduction.product_id, deduction.quantity)
        report.deducted.clear()

    def _unresolved(self, order: Order, report: DeductionReport, skipped: SkippedItem) -> None:
        if self._policy is UnresolvedItemPolicy.FAIL:
            raise EntityNotFoundError(
                f"Cannot resolve product for '{skipped.title}' in order #{order.id} "
                f"({skipped.reason})"
            )
        logger.warning(
            "Order #%s item '%s' skipped: %s", order.id, skipped.title, skipped.reason
        )
        report.skipped.append(skipped)
